"""Standardized error handling for utilities.

Provides error codes and structured error payloads for precondition failures.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for utility failures."""
    ASSERTION_FAILED = "ASSERTION_FAILED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN = "UNKNOWN"


class UtilError(BaseModel):
    """Structured error describing a failed utility call.

    Attributes:
        operation: Name of the helper that failed
        message: Human-readable error message
        code: Machine-readable error code
        details: Optional detailed information (e.g., stack trace)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Util Error",
            "examples": [{"operation": "assert", "message": "value must be set", "code": "ASSERTION_FAILED"}],
        },
    )

    operation: Annotated[str, Field(min_length=1, description="Helper that produced the error")]
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")
    details: str | None = Field(default=None, description="Optional detailed error info")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @classmethod
    def from_exception(cls, operation: str, exc: Exception, *, include_trace: bool = False) -> Self:
        """Create from an exception, optionally capturing the current traceback."""
        return cls(
            operation=operation,
            message=str(exc) or type(exc).__name__,
            code=ErrorCode.INVALID_ARGUMENT if isinstance(exc, (TypeError, ValueError)) else ErrorCode.UNKNOWN,
            details=traceback.format_exc() if include_trace else None,
        )

    def render(self) -> str:
        """Format error as a single line."""
        return f"[{self.code}] {self.operation}: {self.message}"

    __str__ = render


class UtilException(Exception):
    """Exception wrapping a UtilError for raising."""

    def __init__(self, error: UtilError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, operation: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> Self:
        return cls(UtilError(operation=operation, message=message, code=code))


class AssertionFailure(UtilException, AssertionError):
    """Raised by ``assert_`` when a precondition does not hold."""

    @classmethod
    def with_message(cls, message: str) -> Self:
        return cls(UtilError(operation="assert", message=message, code=ErrorCode.ASSERTION_FAILED))
