"""Preset validating middleware.

Each factory returns a chain step `(value, field, record) -> value` that
passes the value through unchanged or raises ValidationFailure describing
what was expected.

Example:
    >>> from fieldwatch import build
    >>> org = build({"name": "Needs a name"}, {"name": [is_string, shorter_than(26), longer_than(2)]})
    >>> org["name"] = "ab"
    Traceback (most recent call last):
        ...
    fieldwatch.foundation.errors.errors.ValidationFailure: 'name' rejected [OUT_OF_BOUNDS]: expected length > 2, got length 2
"""

from __future__ import annotations

import re
from collections.abc import Callable, MutableMapping
from typing import Any

from ..core.chain import MISSING, Middleware
from ..foundation.errors import ErrorCode, ValidationFailure

Predicate = Callable[[Any], bool]


def _named(step: Middleware, name: str) -> Middleware:
    step.__name__ = step.__qualname__ = name
    return step


def _type_label(value: object) -> str:
    return type(value).__name__


# ─────────────────────────────────────────────────────────────────────────────
# Generic
# ─────────────────────────────────────────────────────────────────────────────

def check(predicate: Predicate, expected: str, code: ErrorCode = ErrorCode.VALIDATION_FAILED) -> Middleware:
    """Turn a predicate into a step. TypeError/ValueError from the predicate count as failure.

    Example:
        >>> even = check(lambda v: v % 2 == 0, "an even number")
    """
    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        try:
            ok = predicate(value)
        except (TypeError, ValueError):
            ok = False
        if not ok:
            raise ValidationFailure.create(field, value, expected, code)
        return value
    return _named(step, f"check({expected})")


# ─────────────────────────────────────────────────────────────────────────────
# Type checks
# ─────────────────────────────────────────────────────────────────────────────

def is_type(*types: type, exclude_bool: bool = False) -> Middleware:
    """Require isinstance(value, types). `exclude_bool` rejects True/False for int checks."""
    if not types:
        raise ValueError("is_type() needs at least one type")
    label = " | ".join(t.__name__ for t in types)

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if not isinstance(value, types) or (exclude_bool and isinstance(value, bool)):
            raise ValidationFailure.create(
                field, value, f"type {label}", ErrorCode.TYPE_MISMATCH,
                message=f"expected type {label}, got {_type_label(value)}",
            )
        return value
    return _named(step, f"is_type({label})")


is_string = is_type(str)
is_int = is_type(int, exclude_bool=True)
is_number = is_type(int, float, exclude_bool=True)
is_bool = is_type(bool)


def not_empty(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
    """Reject None, MISSING and empty strings/collections."""
    if value is None or value is MISSING or (hasattr(value, "__len__") and len(value) == 0):
        raise ValidationFailure.create(field, value, "a non-empty value", message="cannot be empty")
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Bounds
# ─────────────────────────────────────────────────────────────────────────────

def _length_step(name: str, expected: str, ok: Callable[[int], bool]) -> Middleware:
    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        try:
            size = len(value)
        except TypeError:
            raise ValidationFailure.create(
                field, value, expected, ErrorCode.TYPE_MISMATCH,
                message=f"expected {expected}, got unsized {_type_label(value)}",
            ) from None
        if not ok(size):
            raise ValidationFailure.create(
                field, value, expected, ErrorCode.OUT_OF_BOUNDS,
                message=f"expected {expected}, got length {size}",
            )
        return value
    return _named(step, name)


def shorter_than(n: int) -> Middleware:
    """Require len(value) < n."""
    return _length_step(f"shorter_than({n})", f"length < {n}", lambda size: size < n)


def longer_than(n: int) -> Middleware:
    """Require len(value) > n."""
    return _length_step(f"longer_than({n})", f"length > {n}", lambda size: size > n)


def length_between(low: int, high: int) -> Middleware:
    """Require low <= len(value) <= high."""
    if low > high:
        raise ValueError(f"length_between(): low ({low}) > high ({high})")
    return _length_step(f"length_between({low}, {high})", f"length between {low} and {high}", lambda size: low <= size <= high)


def in_range(low: float, high: float) -> Middleware:
    """Require a number in [low, high]."""
    expected = f"a number between {low} and {high}"

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationFailure.create(
                field, value, expected, ErrorCode.TYPE_MISMATCH,
                message=f"expected {expected}, got {_type_label(value)}",
            )
        if not low <= value <= high:
            raise ValidationFailure.create(field, value, expected, ErrorCode.OUT_OF_BOUNDS)
        return value
    return _named(step, f"in_range({low}, {high})")


# ─────────────────────────────────────────────────────────────────────────────
# Patterns & choices
# ─────────────────────────────────────────────────────────────────────────────

def matches(pattern: str | re.Pattern[str]) -> Middleware:
    """Require a string that fully matches `pattern`."""
    compiled = re.compile(pattern)
    expected = f"a string matching {compiled.pattern!r}"

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if not isinstance(value, str) or compiled.fullmatch(value) is None:
            raise ValidationFailure.create(field, value, expected, ErrorCode.PATTERN_MISMATCH)
        return value
    return _named(step, f"matches({compiled.pattern!r})")


def one_of(*allowed: object) -> Middleware:
    """Require value to be one of the allowed options."""
    options = tuple(allowed)
    expected = f"one of: {', '.join(map(repr, options))}"

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if value not in options:
            raise ValidationFailure.create(field, value, expected, ErrorCode.INVALID_CHOICE)
        return value
    return _named(step, "one_of")
