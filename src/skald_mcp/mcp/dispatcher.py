"""
Tool dispatcher: binds schema, shaper, backend call and formatter into one
invocable unit per tool.

An invocation either returns text or raises. Bad arguments raise
ValidationError before the backend is touched; anything raised by the
backend call or while formatting its result becomes a SkaldToolError whose
message starts with the tool's failure prefix. Nothing is retried.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Type

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from skald_mcp.core.exceptions import SkaldToolError, ValidationError, error_message
from skald_mcp.mcp.adapters.api_adapter import SkaldAPIAdapter
from skald_mcp.mcp import formatters, shapers
from skald_mcp.mcp.schemas import (
    ChatToolInput,
    CreateMemoToolInput,
    GenerateToolInput,
    MemoIdToolInput,
    SearchToolInput,
    ToolInput,
    UpdateMemoToolInput,
)


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: Type[ToolInput]
    failure_prefix: str
    trace_message: str
    trace_field: str
    shape: Callable[[Any], Dict[str, Any]]
    invoke: Callable[[SkaldAPIAdapter, Any, Dict[str, Any]], Any]
    render: Callable[[Any, Any], str]


def with_error_handling(tool_name: str, failure_prefix: str, call: Callable[[], str]) -> str:
    try:
        return call()
    except Exception as exc:
        message = f"{failure_prefix}: {error_message(exc)}"
        logger.error("Tool {} failed: {}", tool_name, message)
        raise SkaldToolError(
            tool_name, message, recoverable=getattr(exc, "recoverable", None)
        ) from exc


def validate_arguments(definition: ToolDefinition, arguments: Mapping[str, Any]) -> ToolInput:
    """
    Validate raw tool arguments against the tool's schema.

    A null argument is treated as not provided.

    Raises:
        ValidationError: On the first type, enum or bound violation.
    """
    provided = {k: v for k, v in arguments.items() if v is not None}
    try:
        return definition.input_model.model_validate(provided)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or definition.name
        raise ValidationError(
            field=field,
            reason=first["msg"],
            value=first.get("input"),
            context={"tool": definition.name, "error_count": exc.error_count()},
        ) from exc


def dispatch(definition: ToolDefinition, adapter: SkaldAPIAdapter, arguments: Mapping[str, Any]) -> str:
    args = validate_arguments(definition, arguments)
    logger.info(definition.trace_message, getattr(args, definition.trace_field))
    payload = definition.shape(args)
    return with_error_handling(
        definition.name,
        definition.failure_prefix,
        lambda: definition.render(args, definition.invoke(adapter, args, payload)),
    )


TOOL_DEFINITIONS = (
    ToolDefinition(
        name="skald-chat",
        description=(
            "Ask a question to your Skald knowledge base and get an AI-generated response "
            "with inline citations. Supports optional filters to narrow search context"
        ),
        input_model=ChatToolInput,
        failure_prefix="Failed to get response from Skald chat",
        trace_message="Asking Skald chat: {}",
        trace_field="query",
        shape=shapers.shape_chat,
        invoke=lambda adapter, args, payload: adapter.chat(payload),
        render=lambda args, result: formatters.format_answer(result),
    ),
    ToolDefinition(
        name="skald-search",
        description=(
            "Search through your Skald memos using semantic search on memo chunks "
            "with optional filters"
        ),
        input_model=SearchToolInput,
        failure_prefix="Failed to search Skald memos",
        trace_message="Searching Skald memos: {}",
        trace_field="query",
        shape=shapers.shape_search,
        invoke=lambda adapter, args, payload: adapter.search(payload),
        render=lambda args, result: formatters.format_search(result),
    ),
    ToolDefinition(
        name="skald-create-memo",
        description=(
            "Create a new memo in Skald that will be automatically processed "
            "(summarized, tagged, chunked, and indexed for search)"
        ),
        input_model=CreateMemoToolInput,
        failure_prefix="Failed to create Skald memo",
        trace_message="Creating Skald memo: {}",
        trace_field="title",
        shape=shapers.shape_create_memo,
        invoke=lambda adapter, args, payload: adapter.create_memo(payload),
        render=lambda args, result: formatters.format_create_memo(args.title, result),
    ),
    ToolDefinition(
        name="skald-get-memo",
        description=(
            "Retrieve a memo by UUID or client reference ID with full content, "
            "summary, tags, and chunks"
        ),
        input_model=MemoIdToolInput,
        failure_prefix="Failed to get Skald memo",
        trace_message="Getting Skald memo: {}",
        trace_field="memo_id",
        shape=shapers.shape_memo_ref,
        invoke=lambda adapter, args, payload: adapter.get_memo(payload["memo_id"], payload["id_type"]),
        render=lambda args, result: formatters.format_get_memo(result),
    ),
    ToolDefinition(
        name="skald-update-memo",
        description=(
            "Update an existing memo by UUID or client reference ID. "
            "If content is updated, the memo will be reprocessed"
        ),
        input_model=UpdateMemoToolInput,
        failure_prefix="Failed to update Skald memo",
        trace_message="Updating Skald memo: {}",
        trace_field="memo_id",
        shape=shapers.shape_update_memo,
        invoke=lambda adapter, args, payload: adapter.update_memo(args.memo_id, payload, args.id_type),
        render=lambda args, result: formatters.format_update_memo(args.memo_id, result),
    ),
    ToolDefinition(
        name="skald-delete-memo",
        description=(
            "Permanently delete a memo by UUID or client reference ID. This deletes the memo "
            "and all associated data (content, summary, tags, chunks)"
        ),
        input_model=MemoIdToolInput,
        failure_prefix="Failed to delete Skald memo",
        trace_message="Deleting Skald memo: {}",
        trace_field="memo_id",
        shape=shapers.shape_memo_ref,
        invoke=lambda adapter, args, payload: adapter.delete_memo(payload["memo_id"], payload["id_type"]),
        render=lambda args, result: formatters.format_delete_memo(args.memo_id),
    ),
    ToolDefinition(
        name="skald-generate",
        description=(
            "Generate content (documents, answers, drafts) grounded in your Skald knowledge "
            "base. Supports optional rules and filters"
        ),
        input_model=GenerateToolInput,
        failure_prefix="Failed to generate content with Skald",
        trace_message="Generating with Skald: {}",
        trace_field="prompt",
        shape=shapers.shape_generate,
        invoke=lambda adapter, args, payload: adapter.generate(payload),
        render=lambda args, result: formatters.format_answer(result),
    ),
)

TOOL_REGISTRY: Dict[str, ToolDefinition] = {d.name: d for d in TOOL_DEFINITIONS}
