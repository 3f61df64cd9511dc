"""Result/Either monad for checked validation outcomes.

A discriminated union for success/failure so call sites that prefer not to
catch exceptions can branch on the outcome of a write instead:
- Functor: map, map_err
- Monad: flat_map (bind)
- Railway-oriented composition (used to fold middleware chains)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok("Skydiving Rocks!").map(str.upper).unwrap()
        'SKYDIVING ROCKS!'

        >>> def longer_than_two(s: str) -> Result[str, str]:
        ...     return Ok(s) if len(s) > 2 else Err("too short")
        >>> Ok("ab").flat_map(longer_than_two).unwrap_err()
        'too short'
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Ok() or Err() instead."""
        self._value: T | E = value
        self._is_ok: bool = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─────────────────────────────────────────────────────────────────
    # Value Extraction
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            RuntimeError: If Result is Err
        """
        if self._is_ok:
            return cast(T, self._value)
        raise RuntimeError(f"Called unwrap() on Err value: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            RuntimeError: If Result is Ok
        """
        if not self._is_ok:
            return cast(E, self._value)
        raise RuntimeError(f"Called unwrap_err() on Ok value: {self._value!r}")

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return cast(T, self._value) if self._is_ok else f(cast(E, self._value))

    def ok(self) -> T | None:
        return cast(T, self._value) if self._is_ok else None

    def err(self) -> E | None:
        return cast(E, self._value) if not self._is_ok else None

    # ─────────────────────────────────────────────────────────────────
    # Functor / Monad
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the Ok value; Err passes through unchanged."""
        if self._is_ok:
            return Ok(f(cast(T, self._value)))
        return Err(cast(E, self._value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the Err value; Ok passes through unchanged."""
        if not self._is_ok:
            return Err(f(cast(E, self._value)))
        return Ok(cast(T, self._value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chains steps that can fail; the first Err wins."""
        if self._is_ok:
            return f(cast(T, self._value))
        return Err(cast(E, self._value))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map for better readability."""
        return self.flat_map(f)

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis over both variants.

        Example:
            >>> Err("too long").match(ok=lambda v: v, err=lambda e: f"rejected: {e}")
            'rejected: too long'
        """
        if self._is_ok:
            return ok(cast(T, self._value))
        return err(cast(E, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        variant = "Ok" if self._is_ok else "Err"
        return f"{variant}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))

    def __iter__(self) -> Iterator[T]:
        """Yield the Ok value, or nothing for Err."""
        if self._is_ok:
            yield cast(T, self._value)


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, is_ok=True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, is_ok=False)


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Convert Results to a Result of list, failing fast on the first Err.

    Example:
        >>> sequence([Ok(1), Err("bad"), Ok(3)]).unwrap_err()
        'bad'
    """
    values: list[T] = []
    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())
    return Ok(values)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating every error instead of failing fast."""
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if result.is_ok():
            values.append(result.unwrap())
        else:
            errors.append(result.unwrap_err())
    return Ok(values) if not errors else Err(errors)
