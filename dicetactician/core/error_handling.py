"""
Error handling module for the engine.

Engine operations never raise for invalid use. Every precondition failure
is reported back to the caller as an unsuccessful ActionResult carrying a
human readable message, and is logged as a warning with its context.
"""

from typing import Any

from pydantic import BaseModel, Field

from .logging import log_warning


class ActionResult(BaseModel):
    """Outcome of an engine operation: a success flag plus a message."""

    success: bool = Field(
        description="True if the operation was applied, False if it was rejected.",
    )
    message: str = Field(
        "",
        description="Human readable description of the outcome.",
    )


def reject(message: str, context: dict[str, Any] | None = None) -> ActionResult:
    """
    Builds the result of a rejected operation and logs it.

    Args:
        message (str):
            Why the operation was rejected.
        context (dict[str, Any] | None):
            Optional context for the log entry.

    Returns:
        ActionResult:
            An unsuccessful result. State must be left untouched by the caller.

    """
    log_warning(f"Rejected: {message}", context)
    return ActionResult(success=False, message=message)


def accept(message: str = "") -> ActionResult:
    """Builds the result of a successful operation."""
    return ActionResult(success=True, message=message)
