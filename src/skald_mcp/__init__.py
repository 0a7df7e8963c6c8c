"""
Skald MCP - Skald knowledge base tools for AI assistants
========================================================

A Model Context Protocol server that exposes a Skald knowledge base (chat,
semantic search, memo management and generation) as typed tools an AI
assistant host can call.

Main Packages:
    - core: Configuration, logging and exceptions
    - mcp: Tool schemas, filter DSL, request shaping, response formatting,
      the dispatcher and the Skald API adapter
    - cli: The ``skald-mcp`` command

Quick Start:
    SKALD_API_KEY=sk_... skald-mcp

Version: 0.1.0
"""

__version__ = "0.1.0"
