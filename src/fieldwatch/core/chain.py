"""Middleware chain types and left-fold execution.

A middleware is a plain callable `(value, field, record) -> value`. Each
step receives the output of the previous one; the chain's output is what
gets stored. A step rejects a value by raising ValidationFailure, by failing
an assert, or by returning an Err result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

from ..foundation.errors import ConfigurationError, Err, FieldError, Ok, Result, ValidationFailure

# Type alias for a single chain step
Middleware = Callable[[Any, str, MutableMapping[str, Any]], Any]


class _Sentinel:
    __slots__ = ("_name", "_truthy")

    def __init__(self, name: str, truthy: bool) -> None:
        self._name, self._truthy = name, truthy

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return self._truthy


SKIP: Final = _Sentinel("SKIP", True)
"""Optional-chain marker. Only valid as the first entry of a step list."""

MISSING: Final = _Sentinel("MISSING", False)
"""Fold seed used when the initial pass runs over a field not yet in the record."""


def _as_field_error(error: object, key: str, value: object) -> FieldError:
    """Normalize whatever an Err carried into a FieldError."""
    if isinstance(error, FieldError):
        return error
    if isinstance(error, ValidationFailure):
        return error.error
    return FieldError.create(key, str(error).strip() or "rejected", value=value)


def _invoke(step: Middleware, value: Any, key: str, record: MutableMapping[str, Any]) -> Result[Any, ValidationFailure]:
    """Run one step, turning every kind of rejection into Err(ValidationFailure)."""
    try:
        out = step(value, key, record)
    except ValidationFailure as exc:
        return Err(exc)
    except AssertionError as exc:
        failure = ValidationFailure(FieldError.create(key, str(exc).strip() or "assertion failed", value=value), value)
        failure.__cause__ = exc
        return Err(failure)
    if isinstance(out, Result):
        if out.is_err():
            return Err(ValidationFailure(_as_field_error(out.unwrap_err(), key, value), value))
        return Ok(out.unwrap())
    return Ok(out)


def _describe(step: Middleware) -> str:
    return getattr(step, "__qualname__", None) or getattr(step, "__name__", None) or type(step).__name__


@dataclass(frozen=True, slots=True)
class MiddlewareChain:
    """Ordered, non-empty sequence of steps bound to one field.

    An optional chain is skipped by the initial pass in build() when its
    field is absent from the record. Writes always run it.

    Example:
        >>> chain = MiddlewareChain.of(lambda v, k, r: v.strip(), lambda v, k, r: v.upper())
        >>> chain.apply("  hi ", "greeting", {})
        'HI'
        >>> MiddlewareChain.from_steps([SKIP, lambda v, k, r: v]).optional
        True
    """

    steps: tuple[Middleware, ...]
    optional: bool = False
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise ConfigurationError("middleware chain must have at least one step", self.name)
        for pos, step in enumerate(self.steps):
            if step is SKIP:
                raise ConfigurationError(
                    f"SKIP marker at position {pos}; use it only as the first entry of a step list", self.name,
                )
            if not callable(step):
                raise ConfigurationError(f"step {pos} is not callable: {step!r}", self.name)

    @classmethod
    def of(cls, *steps: Middleware, optional: bool = False, name: str | None = None) -> MiddlewareChain:
        return cls(steps, optional=optional, name=name)

    @classmethod
    def from_steps(cls, steps: MiddlewareChain | Middleware | Sequence[object], *, name: str | None = None) -> MiddlewareChain:
        """Normalize a step list, a single callable, or an existing chain.

        A leading SKIP marker turns into `optional=True` and is dropped.
        """
        if isinstance(steps, MiddlewareChain):
            return steps if name is None or steps.name == name else cls(steps.steps, steps.optional, name)
        if callable(steps):
            return cls((steps,), name=name)
        if isinstance(steps, (str, bytes)) or not isinstance(steps, Sequence):
            raise ConfigurationError(f"expected a sequence of middleware, got {type(steps).__name__}", name)
        items = list(steps)
        optional = bool(items) and items[0] is SKIP
        if optional:
            items = items[1:]
        return cls(tuple(items), optional=optional, name=name)  # type: ignore[arg-type]

    def then(self, *steps: Middleware) -> MiddlewareChain:
        """New chain with `steps` appended after the existing ones."""
        return MiddlewareChain(self.steps + steps, self.optional, self.name)

    def apply(self, value: Any, key: str, record: MutableMapping[str, Any]) -> Any:
        """Fold `value` through every step, left to right.

        A failing `assert` inside a step counts as a rejection. Any other
        exception propagates unchanged.

        Raises:
            ValidationFailure: From the first step that rejects the value
        """
        result = self._fold(value, key, record)
        if result.is_err():
            raise result.unwrap_err()
        return result.unwrap()

    def run(self, value: Any, key: str, record: MutableMapping[str, Any]) -> Result[Any, FieldError]:
        """Non-raising fold: Ok(final value) or Err(FieldError)."""
        return self._fold(value, key, record).map_err(lambda exc: exc.error)

    def _fold(self, value: Any, key: str, record: MutableMapping[str, Any]) -> Result[Any, ValidationFailure]:
        # Railway: once a step yields Err, flat_map skips the rest
        result: Result[Any, ValidationFailure] = Ok(value)
        for step in self.steps:
            result = result.flat_map(lambda current, step=step: _invoke(step, current, key, record))
        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self.steps)

    def __repr__(self) -> str:
        flag = ", optional=True" if self.optional else ""
        return f"MiddlewareChain([{', '.join(_describe(s) for s in self.steps)}]{flag})"
