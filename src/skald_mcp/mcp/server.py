"""
Skald MCP Server
================
MCP bridge exposing Skald knowledge-base tools to assistant hosts over stdio.
"""

from typing import Any, Callable, Optional

from loguru import logger

from skald_mcp.core.config import get_config, SkaldMCPConfig
from skald_mcp.core.exceptions import ConfigurationError, DependencyMissingError
from skald_mcp.mcp.adapters.api_adapter import SkaldAPIAdapter
from skald_mcp.mcp.dispatcher import TOOL_REGISTRY, dispatch
from skald_mcp.mcp.schemas import (
    DEFAULT_SEARCH_LIMIT,
    ChatFiltersArg,
    ChatQueryArg,
    ContentArg,
    ExpirationDateArg,
    GenerateFiltersArg,
    IdTypeArg,
    MemoIdArg,
    MetadataArg,
    NewClientReferenceIdArg,
    NewContentArg,
    NewMetadataArg,
    NewSourceArg,
    NewTitleArg,
    ProjectIdArg,
    PromptArg,
    ReferenceIdArg,
    RulesArg,
    SearchFiltersArg,
    SearchLimitArg,
    SearchMethodArg,
    SearchQueryArg,
    SourceArg,
    TagsArg,
    TitleArg,
)

MISSING_API_KEY = "SKALD_API_KEY environment variable or --key argument is required"


def build_server(config: SkaldMCPConfig | None = None, adapter: Optional[SkaldAPIAdapter] = None):
    cfg = config or get_config()

    try:
        from mcp.server.fastmcp import FastMCP
    except ImportError as exc:
        raise DependencyMissingError(
            dependency="mcp",
            message="Install package 'mcp' to run the MCP server."
        ) from exc

    if adapter is None:
        if not cfg.api_key:
            raise ConfigurationError("api_key", MISSING_API_KEY)
        adapter = SkaldAPIAdapter(
            base_url=cfg.api_base_url,
            api_key=cfg.api_key,
            timeout_seconds=cfg.timeout_seconds,
        )

    server = FastMCP(cfg.server_name)
    allow_tools = set(cfg.allow_tools)

    def register_tool(name: str, fn: Callable[[], None]) -> None:
        if name in allow_tools:
            fn()
        else:
            logger.info("Skipping disabled MCP tool: {}", name)

    def run(name: str, **arguments: Any) -> str:
        return dispatch(TOOL_REGISTRY[name], adapter, arguments)

    def tool(name: str):
        return server.tool(name=name, description=TOOL_REGISTRY[name].description)

    def register_chat() -> None:
        @tool("skald-chat")
        def skald_chat(
            query: ChatQueryArg,
            project_id: ProjectIdArg = None,
            filters: ChatFiltersArg = None,
        ) -> str:
            return run("skald-chat", query=query, project_id=project_id, filters=filters)

    def register_search() -> None:
        @tool("skald-search")
        def skald_search(
            query: SearchQueryArg,
            search_method: SearchMethodArg,
            limit: SearchLimitArg = DEFAULT_SEARCH_LIMIT,
            filters: SearchFiltersArg = None,
        ) -> str:
            return run(
                "skald-search",
                query=query,
                search_method=search_method,
                limit=limit,
                filters=filters,
            )

    def register_create_memo() -> None:
        @tool("skald-create-memo")
        def skald_create_memo(
            title: TitleArg,
            content: ContentArg,
            project_id: ProjectIdArg = None,
            metadata: MetadataArg = None,
            reference_id: ReferenceIdArg = None,
            tags: TagsArg = None,
            source: SourceArg = None,
        ) -> str:
            return run(
                "skald-create-memo",
                title=title,
                content=content,
                project_id=project_id,
                metadata=metadata,
                reference_id=reference_id,
                tags=tags,
                source=source,
            )

    def register_get_memo() -> None:
        @tool("skald-get-memo")
        def skald_get_memo(memo_id: MemoIdArg, id_type: IdTypeArg = "memo_uuid") -> str:
            return run("skald-get-memo", memo_id=memo_id, id_type=id_type)

    def register_update_memo() -> None:
        @tool("skald-update-memo")
        def skald_update_memo(
            memo_id: MemoIdArg,
            id_type: IdTypeArg = "memo_uuid",
            title: NewTitleArg = None,
            content: NewContentArg = None,
            metadata: NewMetadataArg = None,
            client_reference_id: NewClientReferenceIdArg = None,
            source: NewSourceArg = None,
            expiration_date: ExpirationDateArg = None,
        ) -> str:
            return run(
                "skald-update-memo",
                memo_id=memo_id,
                id_type=id_type,
                title=title,
                content=content,
                metadata=metadata,
                client_reference_id=client_reference_id,
                source=source,
                expiration_date=expiration_date,
            )

    def register_delete_memo() -> None:
        @tool("skald-delete-memo")
        def skald_delete_memo(memo_id: MemoIdArg, id_type: IdTypeArg = "memo_uuid") -> str:
            return run("skald-delete-memo", memo_id=memo_id, id_type=id_type)

    def register_generate() -> None:
        @tool("skald-generate")
        def skald_generate(
            prompt: PromptArg,
            rules: RulesArg = None,
            filters: GenerateFiltersArg = None,
        ) -> str:
            return run("skald-generate", prompt=prompt, rules=rules, filters=filters)

    register_tool("skald-chat", register_chat)
    register_tool("skald-search", register_search)
    register_tool("skald-create-memo", register_create_memo)
    register_tool("skald-get-memo", register_get_memo)
    register_tool("skald-update-memo", register_update_memo)
    register_tool("skald-delete-memo", register_delete_memo)
    register_tool("skald-generate", register_generate)

    return server


def main(config: SkaldMCPConfig | None = None) -> None:
    cfg = config or get_config()
    server = build_server(cfg)
    logger.info("Skald MCP Server running on stdio")
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
