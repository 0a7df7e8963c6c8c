"""
Skald MCP CLI - Main Entry Point

Starts the Skald MCP server on stdio.

Usage:
    skald-mcp --key sk_...                  # API key on the command line
    SKALD_API_KEY=sk_... skald-mcp          # API key from the environment
    skald-mcp -c config.yaml --log-level DEBUG
"""

from pathlib import Path
from typing import Optional

import click

from skald_mcp.core.config import load_config
from skald_mcp.core.exceptions import ConfigurationError
from skald_mcp.core.logging_config import configure_logging
from skald_mcp.mcp import server as mcp_server


@click.command()
@click.option(
    "--key",
    "-k",
    help="Skald API key (defaults to SKALD_API_KEY)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config.yaml file",
)
@click.option(
    "--base-url",
    help="Skald API base URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (logs go to stderr)",
)
def cli(key: Optional[str], config: Optional[Path], base_url: Optional[str], log_level: Optional[str]):
    """
    Skald MCP - knowledge base tools for AI assistants

    Exposes chat, search, memo management and generation over the
    Model Context Protocol (stdio transport).
    """
    try:
        cfg = load_config(config)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    cfg = cfg.with_overrides(
        api_key=key,
        api_base_url=base_url,
        log_level=log_level.upper() if log_level else None,
    )
    if not cfg.api_key:
        raise click.ClickException(mcp_server.MISSING_API_KEY)

    configure_logging(level=cfg.log_level)
    mcp_server.main(cfg)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
