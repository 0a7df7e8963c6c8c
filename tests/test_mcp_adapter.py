"""
Tests for the Skald API Adapter
===============================
Tests for src/skald_mcp/mcp/adapters/api_adapter.py covering request shape,
authentication, URL encoding, HTTPS enforcement and error mapping.
"""

import pytest
import requests

from skald_mcp.mcp.adapters.api_adapter import SkaldAPIAdapter, SkaldAPIError
from conftest import DummyResponse

BASE_URL = "http://localhost:8000"


class _Calls(list):
    pass


@pytest.fixture
def calls(monkeypatch):
    recorded = _Calls()
    recorded.data = {"ok": True}
    recorded.status_code = 200

    def fake_request(method, url, json, headers, timeout):
        recorded.append({"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout})
        return DummyResponse(status_code=recorded.status_code, data=recorded.data)

    monkeypatch.setattr(requests, "request", fake_request)
    return recorded


def test_adapter_sends_bearer_token(calls):
    adapter = SkaldAPIAdapter(BASE_URL, "sk_test", timeout_seconds=5)
    adapter.create_memo({"title": "t", "content": "c"})

    assert calls[0]["headers"]["Authorization"] == "Bearer sk_test"
    assert calls[0]["timeout"] == 5
    assert calls[0]["url"] == f"{BASE_URL}/api/v1/memo"
    assert calls[0]["method"] == "POST"
    assert calls[0]["json"] == {"title": "t", "content": "c"}


def test_adapter_strips_trailing_slash(calls):
    adapter = SkaldAPIAdapter(BASE_URL + "/", "key")
    adapter.search({"query": "q"})
    assert calls[0]["url"] == f"{BASE_URL}/api/v1/search"


def test_chat_disables_streaming_and_returns_text(calls):
    calls.data = {"ok": True, "response": "The answer [[1]]"}
    adapter = SkaldAPIAdapter(BASE_URL, "key")

    result = adapter.chat({"query": "what?"})

    assert result == "The answer [[1]]"
    assert calls[0]["json"] == {"query": "what?", "stream": False}
    assert calls[0]["url"].endswith("/api/v1/chat")


def test_chat_without_response_returns_none(calls):
    calls.data = {"ok": True}
    adapter = SkaldAPIAdapter(BASE_URL, "key")
    assert adapter.chat({"query": "q"}) is None


def test_generate_posts_prompt(calls):
    calls.data = {"ok": True, "response": "Draft"}
    adapter = SkaldAPIAdapter(BASE_URL, "key")

    assert adapter.generate({"prompt": "Write docs", "rules": "Be brief"}) == "Draft"
    assert calls[0]["url"].endswith("/api/v1/generate")
    assert calls[0]["json"] == {"prompt": "Write docs", "rules": "Be brief", "stream": False}


class TestMemoPaths:
    """Memo identifiers travel URL-encoded in the path, id_type in the query."""

    def test_get_memo_url(self, calls):
        adapter = SkaldAPIAdapter(BASE_URL, "key")
        adapter.get_memo("abc-123", "memo_uuid")

        assert calls[0]["method"] == "GET"
        assert calls[0]["url"] == f"{BASE_URL}/api/v1/memo/abc-123?id_type=memo_uuid"
        assert calls[0]["json"] is None

    def test_reference_id_is_encoded(self, calls):
        adapter = SkaldAPIAdapter(BASE_URL, "key")
        adapter.get_memo("docs/page one?x=1", "reference_id")

        url = calls[0]["url"]
        assert "/memo/docs%2Fpage%20one%3Fx%3D1?" in url
        assert url.endswith("id_type=reference_id")

    def test_update_memo_uses_patch(self, calls):
        adapter = SkaldAPIAdapter(BASE_URL, "key")
        adapter.update_memo("abc", {"title": "New"}, "memo_uuid")

        assert calls[0]["method"] == "PATCH"
        assert calls[0]["json"] == {"title": "New"}
        assert "/memo/abc?id_type=memo_uuid" in calls[0]["url"]

    def test_delete_memo_accepts_empty_body(self, calls):
        calls.status_code = 204
        adapter = SkaldAPIAdapter(BASE_URL, "key")

        assert adapter.delete_memo("abc", "reference_id") is None
        assert calls[0]["method"] == "DELETE"


class TestErrors:
    def test_http_error(self, calls):
        calls.status_code = 404
        calls.data = {"detail": "not found"}
        adapter = SkaldAPIAdapter(BASE_URL, "key")

        with pytest.raises(SkaldAPIError) as exc_info:
            adapter.get_memo("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.recoverable is False
        assert "Upstream error (404)" in exc_info.value.message

    def test_server_error_is_recoverable(self, calls):
        calls.status_code = 503
        adapter = SkaldAPIAdapter(BASE_URL, "key")

        with pytest.raises(SkaldAPIError) as exc_info:
            adapter.search({"query": "q"})

        assert exc_info.value.recoverable is True

    def test_network_error(self, monkeypatch):
        def fake_request(method, url, json, headers, timeout):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(requests, "request", fake_request)
        adapter = SkaldAPIAdapter(BASE_URL, "key")

        with pytest.raises(SkaldAPIError) as exc_info:
            adapter.chat({"query": "q"})

        assert "Upstream request failed" in str(exc_info.value)
        assert exc_info.value.status_code is None

    def test_non_json_response_raises_error(self, monkeypatch):
        class NonJSONResponse:
            status_code = 200
            text = "Not JSON"

            def json(self):
                raise ValueError("No JSON")

        monkeypatch.setattr(requests, "request", lambda **kwargs: NonJSONResponse())
        adapter = SkaldAPIAdapter(BASE_URL, "key")

        with pytest.raises(SkaldAPIError) as exc_info:
            adapter.search({"query": "q"})

        assert "non-JSON" in str(exc_info.value)


class TestHTTPSEnforcement:
    """Tests for HTTPS enforcement in production mode."""

    def test_https_required_in_production(self, monkeypatch):
        monkeypatch.setenv("SKALD_ENV", "production")

        with pytest.raises(SkaldAPIError) as exc_info:
            SkaldAPIAdapter("http://api.example.com", "key")

        assert "HTTPS" in str(exc_info.value)

    def test_https_url_accepted_in_production(self, monkeypatch):
        monkeypatch.setenv("SKALD_ENV", "production")
        adapter = SkaldAPIAdapter("https://api.example.com", "key")
        assert adapter.base_url == "https://api.example.com"

    def test_plain_http_warns(self):
        with pytest.warns(UserWarning, match="not using HTTPS"):
            SkaldAPIAdapter("http://api.example.com", "key")
