"""
Skald API Adapter
=================
HTTP client adapter for communicating with the Skald API.

This is the only place the server performs I/O. Each method is exactly one
HTTP round trip; nothing is retried or cached.
"""

from typing import Any, Dict, Optional
import urllib.parse
import warnings
import os

import requests

from skald_mcp.core.exceptions import SkaldAPIError

API_PREFIX = "/api/v1"


def _is_production_mode() -> bool:
    """Check if running in production mode."""
    return os.environ.get("SKALD_ENV", "development").lower() in ("production", "prod", "staging")


class SkaldAPIAdapter:
    def __init__(self, base_url: str, api_key: str, timeout_seconds: int = 30):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

        # SECURITY: Enforce HTTPS in production mode
        if _is_production_mode() and not self.base_url.startswith("https://"):
            raise SkaldAPIError(
                f"SECURITY ERROR: API URL must use HTTPS in production mode. "
                f"Got: {self.base_url}. Set SKALD_ENV=development for local testing."
            )

        if not self.base_url.startswith("https://") and not self.base_url.startswith("http://localhost"):
            warnings.warn(
                f"API URL '{self.base_url}' is not using HTTPS. "
                "API key will be sent over an unencrypted connection.",
                UserWarning
            )

    def _build_path(self, path: str, query_params: Optional[Dict[str, Any]] = None) -> str:
        """
        Build a request path with properly encoded query parameters.

        SECURITY: Uses urllib.parse.urlencode() to prevent URL injection attacks.
        """
        if query_params:
            filtered_params = {k: v for k, v in query_params.items() if v is not None}
            if filtered_params:
                return f"{path}?{urllib.parse.urlencode(filtered_params, safe='')}"
        return path

    def _memo_path(self, memo_id: str, id_type: str) -> str:
        encoded_id = urllib.parse.quote(memo_id, safe='')
        return self._build_path(f"/memo/{encoded_id}", {"id_type": id_type})

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{API_PREFIX}{path}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.request(
                method=method,
                url=url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise SkaldAPIError(f"Upstream request failed: {exc}") from exc

        if response.status_code >= 400:
            try:
                details = response.json()
            except ValueError:
                details = {"detail": response.text}
            raise SkaldAPIError(
                f"Upstream error ({response.status_code}): {details}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.text:
            return {}

        try:
            return response.json()
        except ValueError as exc:
            raise SkaldAPIError("Upstream returned non-JSON response") from exc

    def chat(self, payload: Dict[str, Any]) -> Optional[str]:
        data = self._request("POST", "/chat", {**payload, "stream": False})
        return data.get("response")

    def search(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/search", payload)

    def create_memo(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/memo", payload)

    def get_memo(self, memo_id: str, id_type: str = "memo_uuid") -> Dict[str, Any]:
        return self._request("GET", self._memo_path(memo_id, id_type))

    def update_memo(self, memo_id: str, payload: Dict[str, Any], id_type: str = "memo_uuid") -> Dict[str, Any]:
        return self._request("PATCH", self._memo_path(memo_id, id_type), payload)

    def delete_memo(self, memo_id: str, id_type: str = "memo_uuid") -> None:
        self._request("DELETE", self._memo_path(memo_id, id_type))

    def generate(self, payload: Dict[str, Any]) -> Optional[str]:
        data = self._request("POST", "/generate", {**payload, "stream": False})
        return data.get("response")
