"""
Skald MCP Configuration System
==============================
Centralized, validated configuration with environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, replace

import yaml

from skald_mcp.core.exceptions import ConfigurationError


DEFAULT_API_BASE_URL = "https://api.useskald.com"

TOOL_NAMES = (
    "skald-chat",
    "skald-search",
    "skald-create-memo",
    "skald-get-memo",
    "skald-update-memo",
    "skald-delete-memo",
    "skald-generate",
)


@dataclass(frozen=True)
class SkaldMCPConfig:
    api_key: Optional[str] = None
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: int = 30
    server_name: str = "skald-mcp"
    log_level: str = "INFO"
    allow_tools: list[str] = field(default_factory=lambda: list(TOOL_NAMES))

    def with_overrides(self, **overrides) -> "SkaldMCPConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _env_override(key: str, default):
    """Check for SKALD_<KEY> environment variable override."""
    env_key = f"SKALD_{key.upper()}"
    val = os.environ.get(env_key)
    if val is None:
        return default
    # Type coercion based on the default's type
    if isinstance(default, bool):
        return val.lower() in ("true", "1", "yes")
    if isinstance(default, int):
        try:
            return int(val)
        except ValueError as exc:
            raise ConfigurationError(key.lower(), f"expected an integer, got {val!r}") from exc
    return val


def _validate(config: SkaldMCPConfig) -> SkaldMCPConfig:
    if config.timeout_seconds <= 0:
        raise ConfigurationError(
            "timeout_seconds",
            f"must be positive, got {config.timeout_seconds}",
        )
    unknown = [name for name in config.allow_tools if name not in TOOL_NAMES]
    if unknown:
        raise ConfigurationError(
            "allow_tools",
            f"unknown tools: {', '.join(unknown)}",
            {"known_tools": list(TOOL_NAMES)},
        )
    return config


def load_config(path: Optional[Path] = None) -> SkaldMCPConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Priority: ENV > YAML > defaults.

    Args:
        path: Path to config.yaml. If None, searches ./config.yaml.

    Returns:
        Validated SkaldMCPConfig instance.

    Raises:
        ConfigurationError: If a value is out of range or names an unknown tool.
    """
    if path is None:
        candidate = Path("config.yaml")
        if candidate.exists():
            path = candidate

    raw = {}
    if path is not None and path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
            raw = loaded.get("skald") or {}

    defaults = SkaldMCPConfig()
    allow_tools = raw.get("allow_tools")
    if allow_tools is None:
        allow_tools = defaults.allow_tools

    config = SkaldMCPConfig(
        api_key=_env_override("API_KEY", raw.get("api_key", defaults.api_key)),
        api_base_url=_env_override("API_BASE_URL", raw.get("api_base_url", defaults.api_base_url)),
        timeout_seconds=_env_override("TIMEOUT_SECONDS", raw.get("timeout_seconds", defaults.timeout_seconds)),
        server_name=raw.get("server_name", defaults.server_name),
        log_level=_env_override("LOG_LEVEL", raw.get("log_level", defaults.log_level)),
        allow_tools=list(allow_tools),
    )
    return _validate(config)


# Module-level singleton (lazy-loaded)
_CONFIG: Optional[SkaldMCPConfig] = None


def get_config() -> SkaldMCPConfig:
    """Get or initialize the global config singleton."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config():
    """Reset the global config singleton (useful for testing)."""
    global _CONFIG
    _CONFIG = None
