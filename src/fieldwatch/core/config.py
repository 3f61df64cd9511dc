"""Immutable field name -> middleware chain mapping."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ..foundation.errors import ConfigurationError
from .chain import MiddlewareChain


class Configuration(Mapping[str, MiddlewareChain]):
    """Read-only mapping of field names to their chains.

    Built once and never mutated; `|` returns a new merged configuration
    where the right-hand side wins on shared fields.

    Example:
        >>> cfg = Configuration.from_mapping({"name": [is_string, shorter_than(26)]})
        >>> "name" in cfg
        True
    """

    __slots__ = ("_chains",)

    def __init__(self, chains: Mapping[str, MiddlewareChain] | None = None) -> None:
        items = dict(chains or {})
        for key, chain in items.items():
            if not isinstance(key, str):
                raise ConfigurationError(f"field names must be strings, got {type(key).__name__} {key!r}")
            if not isinstance(chain, MiddlewareChain):
                raise ConfigurationError(f"expected MiddlewareChain, got {type(chain).__name__}", key)
        self._chains: Mapping[str, MiddlewareChain] = MappingProxyType(items)

    @classmethod
    def from_mapping(cls, mapping: Configuration | Mapping[str, object] | None) -> Configuration:
        """Normalize every entry in `mapping` (step lists, callables, chains)."""
        if isinstance(mapping, Configuration):
            return mapping
        if mapping is None or not isinstance(mapping, Mapping):
            raise ConfigurationError(f"configuration must be a mapping, got {type(mapping).__name__}")
        chains: dict[str, MiddlewareChain] = {}
        for key, steps in mapping.items():
            if not isinstance(key, str):
                raise ConfigurationError(f"field names must be strings, got {type(key).__name__} {key!r}")
            chains[key] = MiddlewareChain.from_steps(steps, name=key)  # type: ignore[arg-type]
        return cls(chains)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._chains)

    def __getitem__(self, key: str) -> MiddlewareChain:
        return self._chains[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def __or__(self, other: object) -> Configuration:
        if not isinstance(other, Mapping):
            return NotImplemented
        return Configuration({**self._chains, **Configuration.from_mapping(other)._chains})

    def __repr__(self) -> str:
        return f"Configuration({dict(self._chains)!r})"
