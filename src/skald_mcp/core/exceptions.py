"""
Skald MCP Domain-Specific Exceptions
====================================

This module defines a hierarchy of exceptions for consistent error handling
across the Skald MCP server.

Exception Hierarchy:
    SkaldMCPError (base)
    ├── RecoverableError (transient, retry possible)
    │   └── SkaldAPIError
    ├── IrrecoverableError (permanent, requires intervention)
    │   ├── ConfigurationError
    │   ├── ValidationError
    │   │   └── FilterValidationError
    │   └── DependencyMissingError
    └── SkaldToolError (tool call failed, surfaced to the MCP host)

Usage Guidelines:
    - Raise ValidationError before any backend I/O happens
    - Let the dispatcher turn backend failures into SkaldToolError
    - A backend result flagged ok=false is formatted text, not an exception
"""

from typing import Optional, Any
from enum import Enum


class ErrorCategory(Enum):
    """Categories for error classification."""
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    BACKEND = "BACKEND"
    TOOL = "TOOL"
    SYSTEM = "SYSTEM"


class SkaldMCPError(Exception):
    """
    Base exception for all Skald MCP errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context about the error
        recoverable: Whether the error is potentially recoverable
    """

    error_code: str = "SKALD_MCP_ERROR"
    recoverable: bool = True
    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(
        self,
        message: str,
        context: Optional[dict] = None,
        error_code: Optional[str] = None,
        recoverable: Optional[bool] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if error_code is not None:
            self.error_code = error_code
        if recoverable is not None:
            self.recoverable = recoverable

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message

    def to_dict(self, include_traceback: bool = False) -> dict:
        """
        Convert exception to dictionary for structured logging.

        Args:
            include_traceback: Whether to include stack trace (only in DEBUG mode)
        """
        result = {
            "error": self.message,
            "code": self.error_code,
            "recoverable": self.recoverable,
            "category": self.category.value,
        }

        if include_traceback:
            import traceback
            result["traceback"] = traceback.format_exc()

        if self.context:
            result["context"] = self.context

        return result


# =============================================================================
# Base Categories: Recoverable vs Irrecoverable
# =============================================================================

class RecoverableError(SkaldMCPError):
    """
    Base class for recoverable errors.

    These are transient errors that may succeed when the caller tries again:
    - Network failures
    - Upstream 5xx responses
    """
    recoverable = True


class IrrecoverableError(SkaldMCPError):
    """
    Base class for irrecoverable errors.

    These are permanent errors that require intervention:
    - Invalid configuration
    - Invalid tool arguments
    - Missing dependencies
    """
    recoverable = False


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(IrrecoverableError):
    """Raised when configuration is invalid or missing."""
    error_code = "CONFIGURATION_ERROR"
    category = ErrorCategory.CONFIG

    def __init__(self, config_key: str, reason: str, context: Optional[dict] = None):
        ctx = {"config_key": config_key}
        if context:
            ctx.update(context)
        super().__init__(f"Configuration error for '{config_key}': {reason}", ctx)
        self.config_key = config_key


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(IrrecoverableError, ValueError):
    """Raised when a tool argument fails validation."""
    error_code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION

    def __init__(self, field: str, reason: str, value: Any = None, context: Optional[dict] = None):
        ctx = {"field": field}
        if value is not None:
            # Truncate large values
            value_str = str(value)
            if len(value_str) > 100:
                value_str = value_str[:100] + "..."
            ctx["value"] = value_str
        if context:
            ctx.update(context)
        super().__init__(f"Validation error for '{field}': {reason}", ctx)
        self.field = field
        self.reason = reason

    def __str__(self) -> str:
        # Shown to the MCP host as-is; context stays on the exception
        return self.message


class FilterValidationError(ValidationError):
    """Raised when a filter's value does not match its operator."""
    error_code = "FILTER_VALIDATION_ERROR"


# =============================================================================
# Backend Errors
# =============================================================================

class SkaldAPIError(RecoverableError):
    """
    Raised when communication with the Skald API fails.

    Attributes:
        status_code: HTTP status code if available (None for network errors).
    """
    error_code = "SKALD_API_ERROR"
    category = ErrorCategory.BACKEND

    def __init__(self, message: str, status_code: Optional[int] = None, context: Optional[dict] = None):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
            # Client errors will not go away by themselves
            if 400 <= status_code < 500:
                self.recoverable = False
        super().__init__(message, ctx)
        self.status_code = status_code


# =============================================================================
# Tool Errors
# =============================================================================

class SkaldToolError(SkaldMCPError):
    """
    Raised when a tool invocation fails after validation.

    The message is what the MCP host sees, so it is never decorated with
    context.
    """
    error_code = "TOOL_ERROR"
    category = ErrorCategory.TOOL

    def __init__(self, tool_name: str, message: str, recoverable: Optional[bool] = None):
        super().__init__(message, recoverable=recoverable)
        self.tool_name = tool_name

    def __str__(self) -> str:
        return self.message


class DependencyMissingError(IrrecoverableError):
    """Raised when a required dependency is missing."""
    error_code = "DEPENDENCY_MISSING_ERROR"
    category = ErrorCategory.SYSTEM

    def __init__(self, dependency: str, message: str = "", context: Optional[dict] = None):
        ctx = {"dependency": dependency}
        if context:
            ctx.update(context)
        msg = f"Missing dependency: {dependency}"
        if message:
            msg += f". {message}"
        super().__init__(msg, ctx)
        self.dependency = dependency


# =============================================================================
# Utility Functions
# =============================================================================

def error_message(exc: BaseException) -> str:
    """
    Extract the human-readable message of an exception.

    Uses the ``message`` attribute when the exception carries one, and falls
    back to ``str(exc)`` otherwise.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


__all__ = [
    # Base
    "SkaldMCPError",
    "RecoverableError",
    "IrrecoverableError",
    "ErrorCategory",
    # Config
    "ConfigurationError",
    # Validation
    "ValidationError",
    "FilterValidationError",
    # Backend
    "SkaldAPIError",
    # Tool
    "SkaldToolError",
    "DependencyMissingError",
    # Utilities
    "error_message",
]
