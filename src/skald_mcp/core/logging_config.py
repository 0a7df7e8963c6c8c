"""
Skald MCP Logging Configuration
===============================
Centralized logging configuration using loguru.

Logs always go to stderr: stdout is the MCP stdio transport and anything
written there corrupts the protocol stream.

Usage:
    from skald_mcp.core.logging_config import configure_logging

    # At application startup:
    configure_logging(level="INFO", json_format=False)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from loguru import logger


def configure_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    *,
    sink: Optional[str] = None,
) -> None:
    """
    Configure loguru logging for the MCP server.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, use JSON format. If None, check LOG_FORMAT env var.
        sink: Optional file path for log output. If None, logs to stderr.

    Environment:
        LOG_FORMAT: Set to "json" to enable JSON formatted logs.
        LOG_LEVEL: Log level used when ``level`` is not given.
    """
    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "").lower() == "json"

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    logger.remove()

    log_sink = sink if sink else sys.stderr

    if json_format:
        logger.add(
            log_sink,
            level=level.upper(),
            serialize=True,
            backtrace=False,
            diagnose=False,
        )
    else:
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            log_sink,
            level=level.upper(),
            format=format_str,
            colorize=sink is None,
            backtrace=True,
            diagnose=False,
        )

    _intercept_standard_logging(level)
    logger.debug(f"Logging configured: level={level}, json_format={json_format}")


class InterceptHandler(logging.Handler):
    """Redirect standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_level = logger.level(record.levelname).name
        except ValueError:
            log_level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            log_level, record.getMessage()
        )


def _intercept_standard_logging(level: str) -> None:
    """
    Intercept standard library logging and redirect to loguru.

    The mcp SDK, httpx and requests all log through the standard library.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in ["mcp", "httpx", "urllib3"]:
        logging.getLogger(logger_name).setLevel(level.upper())


__all__ = ["configure_logging", "InterceptHandler", "logger"]
