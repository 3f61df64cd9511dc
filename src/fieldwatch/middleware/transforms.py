"""Preset transforming middleware.

Transforms return a new value for the next step. String transforms leave
non-string values untouched so they can be placed before a type check.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

from ..core.chain import MISSING, Middleware
from ..foundation.errors import ErrorCode, ValidationFailure


def strip(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
    return value.strip() if isinstance(value, str) else value


def lower(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
    return value.lower() if isinstance(value, str) else value


def upper(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
    return value.upper() if isinstance(value, str) else value


def default(fallback: Any, *, factory: Callable[[], Any] | None = None) -> Middleware:
    """Replace MISSING or None with `fallback` (or a fresh `factory()` result).

    Useful as the first step of a non-optional chain so build() creates the
    field when the record lacks it.
    """
    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if value is MISSING or value is None:
            return factory() if factory is not None else fallback
        return value
    step.__name__ = step.__qualname__ = f"default({fallback!r})"
    return step


def coerce(target: Callable[[Any], Any], *, label: str | None = None) -> Middleware:
    """Convert the value by calling `target(value)`, e.g. coerce(int).

    Conversion errors become ValidationFailure with COERCION_FAILED.
    """
    name = label or getattr(target, "__name__", repr(target))

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if value is MISSING:
            raise ValidationFailure.create(field, value, f"a value convertible to {name}", ErrorCode.COERCION_FAILED)
        try:
            return target(value)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise ValidationFailure.create(
                field, value, f"a value convertible to {name}", ErrorCode.COERCION_FAILED,
                message=f"cannot convert {value!r} to {name}: {exc}",
            ) from exc
    step.__name__ = step.__qualname__ = f"coerce({name})"
    return step


def clamp(low: float, high: float) -> Middleware:
    """Pull numbers into [low, high]; non-numbers pass through."""
    if low > high:
        raise ValueError(f"clamp(): low ({low}) > high ({high})")

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        return min(max(value, low), high)
    step.__name__ = step.__qualname__ = f"clamp({low}, {high})"
    return step
