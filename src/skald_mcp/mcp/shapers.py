"""
Request shapers: one pure function per tool turning validated input into the
JSON body sent to the Skald API.

Optional fields are copied only when the caller provided them, so an absent
field is never sent as null and never overwrites anything on the backend.
"""

from typing import Any, Dict, Iterable

from skald_mcp.mcp.filters import filters_payload
from skald_mcp.mcp.schemas import (
    ChatToolInput,
    CreateMemoToolInput,
    GenerateToolInput,
    MemoIdToolInput,
    SearchToolInput,
    ToolInput,
    UpdateMemoToolInput,
)

Payload = Dict[str, Any]


def _add_provided(payload: Payload, args: ToolInput, names: Iterable[str]) -> Payload:
    for name in names:
        if not args.provided(name):
            continue
        value = getattr(args, name)
        if name == "filters":
            # An empty filter list narrows nothing
            if not value:
                continue
            value = filters_payload(value)
        payload[name] = value
    return payload


def shape_chat(args: ChatToolInput) -> Payload:
    return _add_provided({"query": args.query}, args, ("project_id", "filters"))


def shape_search(args: SearchToolInput) -> Payload:
    payload = {
        "query": args.query,
        "search_method": args.search_method,
        "limit": args.limit,
    }
    return _add_provided(payload, args, ("filters",))


def shape_create_memo(args: CreateMemoToolInput) -> Payload:
    payload = {"title": args.title, "content": args.content}
    return _add_provided(
        payload, args, ("project_id", "metadata", "reference_id", "tags", "source")
    )


def shape_memo_ref(args: MemoIdToolInput) -> Payload:
    """Identifier and identifier type for get and delete."""
    return {"memo_id": args.memo_id, "id_type": args.id_type}


def shape_update_memo(args: UpdateMemoToolInput) -> Payload:
    """Body of the update; the identifier travels in the URL."""
    return _add_provided(
        {},
        args,
        ("title", "content", "metadata", "client_reference_id", "source", "expiration_date"),
    )


def shape_generate(args: GenerateToolInput) -> Payload:
    return _add_provided({"prompt": args.prompt}, args, ("rules", "filters"))
