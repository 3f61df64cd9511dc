"""Structured errors for field validation.

Provides error codes and a structured error model describing why a write
was rejected. Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for rejected writes and bad configuration."""
    VALIDATION_FAILED = "VALIDATION_FAILED"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    INVALID_CHOICE = "INVALID_CHOICE"
    COERCION_FAILED = "COERCION_FAILED"
    INVALID_CONFIG = "INVALID_CONFIG"


_REPR_LIMIT = 80


def _short_repr(value: object) -> str:
    text = repr(value)
    return text if len(text) <= _REPR_LIMIT else f"{text[:_REPR_LIMIT - 3]}..."


class FieldError(BaseModel):
    """Structured description of a rejected field value.

    Attributes:
        field: Name of the field being written
        message: Human-readable error message
        expected: Description of the condition the value had to satisfy
        value: repr() of the offending value (truncated)
        code: Machine-readable error code
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "title": "Field Error",
            "description": "Structured error from a middleware chain",
            "examples": [{
                "field": "name",
                "message": "expected length < 26, got 36",
                "expected": "length < 26",
                "value": "'Skydiving Scarf Knitters Association'",
                "code": "OUT_OF_BOUNDS",
            }],
        },
    )

    field: str = Field(description="Field the write targeted")
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    expected: str = Field(default="", description="Expectation the value failed")
    value: str = Field(default="", description="repr() of the offending value")
    code: ErrorCode = Field(default=ErrorCode.VALIDATION_FAILED, description="Machine-readable error classification")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_type_error(self) -> bool:
        """Whether the value had the wrong type."""
        return self.code in (ErrorCode.TYPE_MISMATCH, ErrorCode.COERCION_FAILED)

    @classmethod
    def create(
        cls,
        field: str,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        *,
        expected: str = "",
        value: object = None,
    ) -> Self:
        """Factory method; stores a truncated repr of `value`."""
        return cls(field=field, message=message, code=code, expected=expected, value=_short_repr(value))

    def render(self) -> str:
        """Format error as a single line."""
        return f"'{self.field}' rejected [{self.code}]: {self.message}"

    __str__ = render


class FieldwatchError(Exception):
    """Base class for all errors raised by fieldwatch."""


class ValidationFailure(FieldwatchError, ValueError):
    """Raised by middleware when a value fails a check. Wraps a FieldError."""

    def __init__(self, error: FieldError, value: object = None) -> None:
        self.error = error
        self.value = value
        super().__init__(error.render())

    @property
    def field(self) -> str:
        return self.error.field

    @property
    def expected(self) -> str:
        return self.error.expected

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(
        cls,
        field: str,
        value: object,
        expected: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        *,
        message: str | None = None,
    ) -> Self:
        """Build from the offending value and the expectation it failed."""
        msg = message or f"expected {expected}, got {_short_repr(value)}"
        return cls(FieldError.create(field, msg, code, expected=expected, value=value), value)


class ConfigurationError(FieldwatchError, TypeError):
    """Raised when a watch configuration or record is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"'{field}': {message}" if field is not None else message)
