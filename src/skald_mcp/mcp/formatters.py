"""
Response formatters: one pure function per tool turning a Skald API result
into the single text block returned to the MCP host.
"""

from typing import Any, Mapping, Optional, Union

from skald_mcp.mcp.schemas import Memo, SearchResponse, StatusResponse

NO_RESPONSE = "No response received"
NO_RESULTS = "No results found"
CHUNK_PREVIEW_CHARS = 100


def format_answer(text: Optional[str]) -> str:
    """Chat and generate: the answer verbatim, or a placeholder when empty."""
    return text or NO_RESPONSE


def format_search(response: Union[SearchResponse, Mapping[str, Any]]) -> str:
    results = SearchResponse.model_validate(response).results

    blocks = []
    for idx, result in enumerate(results, start=1):
        parts = [
            f"{idx}. {result.title}",
            f"   UUID: {result.uuid}",
            f"   Summary: {result.summary}",
            f"   Snippet: {result.content_snippet}",
        ]
        if result.distance is not None:
            parts.append(f"   Distance: {result.distance:.4f} (lower is more relevant)")
        blocks.append("\n".join(parts))

    body = "\n\n".join(blocks) if blocks else NO_RESULTS
    return f"Found {len(results)} result(s):\n\n{body}"


def format_create_memo(title: str, response: Union[StatusResponse, Mapping[str, Any]]) -> str:
    if StatusResponse.model_validate(response).ok:
        return f'✓ Memo "{title}" created successfully!'
    return "Failed to create memo"


def format_get_memo(memo: Union[Memo, Mapping[str, Any]]) -> str:
    memo = Memo.model_validate(memo)

    tags_text = ", ".join(t.tag for t in memo.tags)
    chunks_text = "\n".join(
        f"Chunk {c.chunk_index}: {c.chunk_content[:CHUNK_PREVIEW_CHARS]}..."
        for c in memo.chunks
    )

    lines = [
        f"Memo: {memo.title}",
        f"UUID: {memo.uuid}",
        f"Created: {memo.created_at}",
        f"Updated: {memo.updated_at}",
        f"Summary: {memo.summary}",
        f"Content: {memo.content}",
        f"Tags: {tags_text or 'None'}",
        f"Client Reference ID: {memo.client_reference_id or 'None'}",
        f"Source: {memo.source or 'None'}",
        f"Type: {memo.type}",
        f"Chunks: {len(memo.chunks)}",
        f"\n{chunks_text}" if chunks_text else "",
    ]
    return "\n".join(line for line in lines if line)


def format_update_memo(memo_id: str, response: Union[StatusResponse, Mapping[str, Any]]) -> str:
    if StatusResponse.model_validate(response).ok:
        return f'✓ Memo "{memo_id}" updated successfully!'
    return "Failed to update memo"


def format_delete_memo(memo_id: str) -> str:
    return f'✓ Memo "{memo_id}" deleted successfully!'
