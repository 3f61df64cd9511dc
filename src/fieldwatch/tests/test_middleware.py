"""Tests for preset validators, transforms, typed schemas and plugins."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import BaseModel, Field

from fieldwatch import (
    MISSING,
    ErrorCode,
    LoggingMiddleware,
    ValidationFailure,
    build,
    check,
    clamp,
    coerce,
    default,
    from_model,
    in_range,
    is_bool,
    is_int,
    is_number,
    is_string,
    is_type,
    length_between,
    longer_than,
    lower,
    matches,
    not_empty,
    one_of,
    shorter_than,
    strip,
    typed,
    upper,
)
from fieldwatch.foundation.errors import ConfigurationError


def run(step: Any, value: Any, key: str = "field") -> Any:
    return step(value, key, {})


def rejects(step: Any, value: Any) -> ValidationFailure:
    with pytest.raises(ValidationFailure) as info:
        run(step, value)
    return info.value


# ─────────────────────────────────────────────────────────────────────────────
# Type Checks
# ─────────────────────────────────────────────────────────────────────────────


def test_is_string() -> None:
    assert run(is_string, "abc") == "abc"
    failure = rejects(is_string, 5)
    assert failure.code == ErrorCode.TYPE_MISMATCH
    assert failure.error.message == "expected type str, got int"
    assert failure.error.is_type_error


def test_is_int_excludes_bool() -> None:
    assert run(is_int, 3) == 3
    rejects(is_int, True)
    rejects(is_int, 3.0)


def test_is_number_and_is_bool() -> None:
    assert run(is_number, 2.5) == 2.5
    assert run(is_number, 2) == 2
    rejects(is_number, False)
    assert run(is_bool, False) is False
    rejects(is_bool, 0)


def test_is_type_multiple() -> None:
    step = is_type(list, tuple)
    assert run(step, (1,)) == (1,)
    assert rejects(step, "x").expected == "type list | tuple"
    with pytest.raises(ValueError):
        is_type()


def test_not_empty() -> None:
    assert run(not_empty, "a") == "a"
    assert run(not_empty, 0) == 0
    for value in (None, MISSING, "", [], {}):
        assert rejects(not_empty, value).error.message == "cannot be empty"


# ─────────────────────────────────────────────────────────────────────────────
# Bounds
# ─────────────────────────────────────────────────────────────────────────────


def test_length_bounds_are_strict() -> None:
    assert run(shorter_than(26), "x" * 25)
    assert rejects(shorter_than(26), "x" * 26).code == ErrorCode.OUT_OF_BOUNDS
    assert run(longer_than(2), "abc") == "abc"
    failure = rejects(longer_than(2), "ab")
    assert failure.error.message == "expected length > 2, got length 2"


def test_length_check_on_unsized_value() -> None:
    failure = rejects(shorter_than(3), 12)
    assert failure.code == ErrorCode.TYPE_MISMATCH


def test_length_between_inclusive() -> None:
    step = length_between(2, 4)
    assert run(step, [1, 2]) == [1, 2]
    assert run(step, "abcd") == "abcd"
    rejects(step, "a")
    rejects(step, "abcde")
    with pytest.raises(ValueError):
        length_between(5, 1)


def test_in_range() -> None:
    step = in_range(0, 10)
    assert run(step, 0) == 0
    assert run(step, 10.0) == 10.0
    assert rejects(step, 11).code == ErrorCode.OUT_OF_BOUNDS
    assert rejects(step, "5").code == ErrorCode.TYPE_MISMATCH
    rejects(step, True)


# ─────────────────────────────────────────────────────────────────────────────
# Patterns & Choices
# ─────────────────────────────────────────────────────────────────────────────


def test_matches_requires_full_match() -> None:
    step = matches(r"[a-z]+")
    assert run(step, "abc") == "abc"
    assert rejects(step, "abc1").code == ErrorCode.PATTERN_MISMATCH
    rejects(step, 123)


def test_one_of() -> None:
    step = one_of("red", "green")
    assert run(step, "red") == "red"
    failure = rejects(step, "blue")
    assert failure.code == ErrorCode.INVALID_CHOICE
    assert failure.expected == "one of: 'red', 'green'"


def test_check_wraps_predicate() -> None:
    even = check(lambda v: v % 2 == 0, "an even number")
    assert run(even, 4) == 4
    assert rejects(even, 3).expected == "an even number"
    # predicate errors count as failures
    assert rejects(even, "x").field == "field"


# ─────────────────────────────────────────────────────────────────────────────
# Transforms
# ─────────────────────────────────────────────────────────────────────────────


def test_string_transforms_skip_non_strings() -> None:
    assert run(strip, "  a ") == "a"
    assert run(lower, "AbC") == "abc"
    assert run(upper, "AbC") == "ABC"
    assert run(strip, 5) == 5
    assert run(upper, None) is None


def test_default_replaces_missing_and_none() -> None:
    step = default("n/a")
    assert run(step, MISSING) == "n/a"
    assert run(step, None) == "n/a"
    assert run(step, "") == ""
    fresh = default(None, factory=list)
    first, second = run(fresh, MISSING), run(fresh, MISSING)
    assert first == [] and first is not second


def test_coerce() -> None:
    step = coerce(int)
    assert run(step, "42") == 42
    failure = rejects(step, "forty")
    assert failure.code == ErrorCode.COERCION_FAILED
    assert isinstance(failure.__cause__, ValueError)
    assert rejects(step, MISSING).code == ErrorCode.COERCION_FAILED


def test_clamp() -> None:
    step = clamp(0, 5)
    assert run(step, -1) == 0
    assert run(step, 9) == 5
    assert run(step, 3) == 3
    assert run(step, "x") == "x"


def test_transforms_compose_in_a_chain() -> None:
    view = build({"code": "  ab "}, {"code": [strip, upper, is_string, length_between(2, 4)]})
    assert view["code"] == "AB"
    view["code"] = " xyz"
    assert view["code"] == "XYZ"


# ─────────────────────────────────────────────────────────────────────────────
# Typed Schemas
# ─────────────────────────────────────────────────────────────────────────────


class Org(BaseModel):
    name: str = Field(min_length=3, max_length=25)
    members: int = 0
    tags: list[str] | None = None


def test_typed_coerces_in_lax_mode() -> None:
    assert run(typed(int), "42") == 42
    assert run(typed(list[int]), ("1", 2)) == [1, 2]


def test_typed_strict_mode() -> None:
    step = typed(int, strict=True)
    assert run(step, 4) == 4
    assert rejects(step, "4").code == ErrorCode.TYPE_MISMATCH


def test_typed_rejects_missing() -> None:
    assert rejects(typed(str), MISSING).error.message == "field required"


def test_from_model_builds_typed_chains() -> None:
    cfg = from_model(Org)

    assert cfg.fields == ("name", "members", "tags")
    assert not cfg["name"].optional
    assert cfg["members"].optional
    assert cfg["tags"].optional


def test_from_model_enforces_field_constraints() -> None:
    record: dict[str, Any] = {"name": "Knitters"}
    org = build(record, from_model(Org))

    assert record == {"name": "Knitters"}
    org["members"] = "12"
    assert org["members"] == 12

    with pytest.raises(ValidationFailure) as info:
        org["name"] = "Skydiving Scarf Knitters Association"
    assert "at most 25" in info.value.error.message
    assert org["name"] == "Knitters"


def test_from_model_required_field_missing_fails_build() -> None:
    with pytest.raises(ValidationFailure) as info:
        build({}, from_model(Org))
    assert info.value.field == "name"


def test_from_model_extra_steps_run_after_type_check() -> None:
    org = build({"name": "knitters"}, from_model(Org, extra={"name": [upper]}))
    assert org["name"] == "KNITTERS"


def test_from_model_rejects_bad_input() -> None:
    with pytest.raises(ConfigurationError):
        from_model(dict)  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError, match="unknown field"):
        from_model(Org, extra={"nope": [upper]})


# ─────────────────────────────────────────────────────────────────────────────
# Plugins
# ─────────────────────────────────────────────────────────────────────────────


def test_logging_middleware_logs_and_passes_value(caplog: pytest.LogCaptureFixture) -> None:
    view = build({"name": "Old"}, {"name": [is_string, LoggingMiddleware(log_values=True)]})

    with caplog.at_level(logging.INFO, logger="fieldwatch.middleware"):
        view["name"] = "New"

    assert view["name"] == "New"
    assert "[name] set 'Old' -> 'New'" in caplog.messages


def test_logging_middleware_hides_values_by_default(caplog: pytest.LogCaptureFixture) -> None:
    step = LoggingMiddleware()

    with caplog.at_level(logging.INFO, logger="fieldwatch.middleware"):
        assert step("secret", "token", {}) == "secret"

    assert caplog.messages == ["[token] set"]
