import sys
from pathlib import Path

import pytest


# Ensure local src/ package imports work without editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reset the global config singleton and SKALD_* variables between tests."""
    from skald_mcp.core.config import reset_config

    for key in ("SKALD_API_KEY", "SKALD_API_BASE_URL", "SKALD_TIMEOUT_SECONDS", "SKALD_LOG_LEVEL", "SKALD_ENV"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


class DummyResponse:
    """Mock HTTP response for testing."""

    def __init__(self, status_code=200, data=None, text=None):
        self.status_code = status_code
        self._data = data if data is not None else {}
        self.text = text if text is not None else ("" if status_code == 204 else "{...}")

    def json(self):
        return self._data


@pytest.fixture
def memo_payload():
    return {
        "uuid": "6f1c2a9e-0000-4000-8000-000000000001",
        "title": "API Reference",
        "content": "The API exposes memo, search and chat endpoints.",
        "summary": "Overview of the API.",
        "tags": [{"tag": "api"}, {"tag": "docs"}],
        "client_reference_id": None,
        "source": "notion",
        "type": "document",
        "created_at": "2025-01-02T03:04:05Z",
        "updated_at": "2025-01-03T03:04:05Z",
        "chunks": [
            {"chunk_index": 0, "chunk_content": "The API exposes memo, search and chat endpoints."},
        ],
    }
