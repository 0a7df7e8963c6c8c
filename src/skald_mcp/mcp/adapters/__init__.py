"""
MCP Adapters Package
====================
Backend capability used by the MCP tools.

Available Adapters:
    - SkaldAPIAdapter: HTTP/JSON client for the Skald API
"""

from skald_mcp.mcp.adapters.api_adapter import SkaldAPIAdapter
from skald_mcp.core.exceptions import SkaldAPIError

__all__ = ["SkaldAPIAdapter", "SkaldAPIError"]
