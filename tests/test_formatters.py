"""
Tests for response formatting
=============================
"""

from skald_mcp.mcp import formatters


class TestAnswer:
    def test_verbatim(self):
        assert formatters.format_answer("Answer [[1]]") == "Answer [[1]]"

    def test_placeholder(self):
        assert formatters.format_answer(None) == "No response received"
        assert formatters.format_answer("") == "No response received"


class TestSearch:
    def test_no_results(self):
        assert formatters.format_search({"results": []}) == "Found 0 result(s):\n\nNo results found"

    def test_distance_rounded(self):
        text = formatters.format_search(
            {
                "results": [
                    {
                        "title": "API Reference",
                        "uuid": "u1",
                        "summary": "Overview",
                        "content_snippet": "The API...",
                        "distance": 0.12345,
                    }
                ]
            }
        )

        assert text.startswith("Found 1 result(s):\n\n1. API Reference\n")
        assert "   UUID: u1" in text
        assert "   Summary: Overview" in text
        assert "   Snippet: The API..." in text
        assert "   Distance: 0.1235 (lower is more relevant)" in text

    def test_null_distance_omitted(self):
        text = formatters.format_search(
            {
                "results": [
                    {"title": "A", "uuid": "u1", "summary": "s", "content_snippet": "c", "distance": None},
                    {"title": "B", "uuid": "u2", "summary": "s", "content_snippet": "c", "distance": 0.5},
                ]
            }
        )

        first, second = text.split("\n\n")[1:]
        assert "Distance" not in first
        assert second.startswith("2. B")
        assert second.endswith("   Distance: 0.5000 (lower is more relevant)")


class TestMemoStatus:
    def test_create_success(self):
        assert (
            formatters.format_create_memo("API Reference", {"ok": True})
            == '✓ Memo "API Reference" created successfully!'
        )

    def test_create_failure(self):
        assert formatters.format_create_memo("API Reference", {"ok": False}) == "Failed to create memo"

    def test_update(self):
        assert formatters.format_update_memo("abc", {"ok": True}) == '✓ Memo "abc" updated successfully!'
        assert formatters.format_update_memo("abc", {}) == "Failed to update memo"

    def test_delete(self):
        assert formatters.format_delete_memo("abc") == '✓ Memo "abc" deleted successfully!'


class TestGetMemo:
    def test_full_rendering(self, memo_payload):
        text = formatters.format_get_memo(memo_payload)

        assert text == "\n".join(
            [
                "Memo: API Reference",
                "UUID: 6f1c2a9e-0000-4000-8000-000000000001",
                "Created: 2025-01-02T03:04:05Z",
                "Updated: 2025-01-03T03:04:05Z",
                "Summary: Overview of the API.",
                "Content: The API exposes memo, search and chat endpoints.",
                "Tags: api, docs",
                "Client Reference ID: None",
                "Source: notion",
                "Type: document",
                "Chunks: 1",
                "",
                "Chunk 0: The API exposes memo, search and chat endpoints....",
            ]
        )

    def test_empty_tags(self, memo_payload):
        text = formatters.format_get_memo({**memo_payload, "tags": []})
        assert "Tags: None" in text.splitlines()

    def test_tags_joined(self, memo_payload):
        text = formatters.format_get_memo({**memo_payload, "tags": [{"tag": "a"}, {"tag": "b"}]})
        assert "Tags: a, b" in text.splitlines()

    def test_chunk_preview_truncated(self, memo_payload):
        chunks = [{"chunk_index": 3, "chunk_content": "x" * 150}]
        text = formatters.format_get_memo({**memo_payload, "chunks": chunks})

        assert text.splitlines()[-1] == "Chunk 3: " + "x" * 100 + "..."

    def test_no_chunks_drops_preview(self, memo_payload):
        text = formatters.format_get_memo({**memo_payload, "chunks": [], "source": None})

        assert text.endswith("Chunks: 0")
        assert "Source: None" in text
