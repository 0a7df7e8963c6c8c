"""
Skald MCP (Model Context Protocol) Module
=========================================
MCP tools exposing a Skald knowledge base to AI assistant hosts.

Available Tools:
    - skald-chat: Ask the knowledge base a question
    - skald-search: Semantic search over memo chunks
    - skald-create-memo: Create a memo
    - skald-get-memo: Retrieve a memo by UUID or reference ID
    - skald-update-memo: Update selected memo fields
    - skald-delete-memo: Delete a memo
    - skald-generate: Generate content grounded in the knowledge base

Each tool is the same pipeline: validate (schemas) -> shape (shapers) ->
one Skald API call (adapters) -> format (formatters), wired by the
dispatcher. chat, search and generate accept the filter DSL (filters).

Usage:
    from skald_mcp.mcp.server import build_server

    server = build_server(config)
    server.run(transport="stdio")
"""
