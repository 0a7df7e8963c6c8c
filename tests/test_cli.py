"""
Tests for the Skald MCP CLI
"""

import pytest
from click.testing import CliRunner

from skald_mcp.cli.main import cli
from skald_mcp.mcp import server as mcp_server


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture
def started(monkeypatch, tmp_path):
    """Capture the config the server would start with."""
    configs = []
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(mcp_server, "main", lambda cfg: configs.append(cfg))
    monkeypatch.setattr("skald_mcp.cli.main.configure_logging", lambda level: None)
    return configs


def test_missing_key_exits_non_zero(runner, started):
    result = runner.invoke(cli, [])

    assert result.exit_code == 1
    assert "SKALD_API_KEY environment variable or --key argument is required" in result.output
    assert started == []


def test_key_option(runner, started):
    result = runner.invoke(cli, ["--key", "sk_cli"])

    assert result.exit_code == 0
    assert started[0].api_key == "sk_cli"


def test_key_from_environment(runner, started, monkeypatch):
    monkeypatch.setenv("SKALD_API_KEY", "sk_env")

    result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert started[0].api_key == "sk_env"


def test_option_beats_environment(runner, started, monkeypatch):
    monkeypatch.setenv("SKALD_API_KEY", "sk_env")

    runner.invoke(cli, ["-k", "sk_cli", "--base-url", "https://eu.example.com", "--log-level", "debug"])

    assert started[0].api_key == "sk_cli"
    assert started[0].api_base_url == "https://eu.example.com"
    assert started[0].log_level == "DEBUG"


def test_invalid_config_file(runner, started, tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("skald:\n  timeout_seconds: -1\n")

    result = runner.invoke(cli, ["--key", "k", "--config", str(path)])

    assert result.exit_code == 1
    assert "timeout_seconds" in result.output
