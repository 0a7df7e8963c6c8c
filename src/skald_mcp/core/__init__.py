"""
Skald MCP Core
==============
Configuration, logging and the exception hierarchy shared by the server.
"""

from skald_mcp.core.config import SkaldMCPConfig, TOOL_NAMES, get_config, load_config, reset_config
from skald_mcp.core.exceptions import (
    ConfigurationError,
    SkaldAPIError,
    SkaldMCPError,
    SkaldToolError,
    ValidationError,
)

__all__ = [
    "SkaldMCPConfig",
    "TOOL_NAMES",
    "get_config",
    "load_config",
    "reset_config",
    "ConfigurationError",
    "SkaldAPIError",
    "SkaldMCPError",
    "SkaldToolError",
    "ValidationError",
]
