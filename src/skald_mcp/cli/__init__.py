"""
Skald MCP CLI - starts the MCP server on stdio.
"""

from .main import cli

__all__ = ["cli"]
