"""Middleware-gated view over a caller-owned record.

build() wraps a mutable mapping so that every write to a configured field is
folded through that field's middleware chain before it is stored. Reads and
writes to unconfigured fields go straight to the record.

Example:
    >>> from fieldwatch import build, is_string, longer_than, shorter_than
    >>> org = build({"name": "Needs a name"}, {"name": [is_string, shorter_than(26), longer_than(2)]})
    >>> org["name"] = "Skydiving Rocks!"
    >>> org["name"]
    'Skydiving Rocks!'
    >>> org.try_set("name", "Skydiving Scarf Knitters Association").is_err()
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from ..foundation.config import get_settings
from ..foundation.errors import ConfigurationError, Err, FieldError, Ok, Result, ValidationFailure
from .chain import MISSING
from .config import Configuration

logger = logging.getLogger("fieldwatch.watch")

Record = MutableMapping[str, Any]


class Watched(MutableMapping[str, Any]):
    """The intercepted view returned by build().

    Behaves like the wrapped record for reads. Writes to configured fields
    run the field's chain with the candidate value as the fold seed; the
    record only changes if the whole chain succeeds.
    """

    __slots__ = ("_record", "_config")

    def __init__(self, record: Record, configuration: Configuration) -> None:
        self._record = record
        self._config = configuration

    @property
    def record(self) -> Record:
        """The wrapped record itself (never a copy)."""
        return self._record

    @property
    def configuration(self) -> Configuration:
        return self._config

    def is_watched(self, key: str) -> bool:
        return key in self._config

    # ─────────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────────

    def set(self, key: str, value: Any) -> Any:
        """Write `value` to `key` and return what was actually stored.

        Raises:
            ValidationFailure: If a step in the field's chain rejects the value;
                the stored value is left as it was
        """
        chain = self._config.get(key)
        if chain is None:
            self._record[key] = value
            return value
        try:
            stored = chain.apply(value, key, self._record)
        except ValidationFailure as exc:
            logger.debug("rejected write to %r: %s", key, exc.error.message)
            raise
        self._record[key] = stored
        return stored

    def try_set(self, key: str, value: Any) -> Result[Any, FieldError]:
        """Like set() but returns Ok(stored) or Err(FieldError) instead of raising."""
        try:
            return Ok(self.set(key, value))
        except ValidationFailure as exc:
            return Err(exc.error)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key in self._record:
            return self._record[key]
        return self.set(key, default)

    def __delitem__(self, key: str) -> None:
        del self._record[key]

    # ─────────────────────────────────────────────────────────────────
    # Reads (passthrough)
    # ─────────────────────────────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._record[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self._record.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._record

    def __iter__(self) -> Iterator[str]:
        return iter(self._record)

    def __len__(self) -> int:
        return len(self._record)

    def __repr__(self) -> str:
        return f"Watched({self._record!r}, fields={list(self._config)!r})"


def build(
    record: Record,
    configuration: Configuration | Mapping[str, object],
    *,
    atomic: bool | None = None,
) -> Watched:
    """Run every configured chain once over `record` and return the watched view.

    For each configured field, in configuration order: an optional chain whose
    field is absent is skipped; otherwise the chain is folded over the current
    value (MISSING when absent) and the result is written back.

    Args:
        record: Caller-owned mutable mapping; wrapped, never copied
        configuration: Field name -> step list, chain, or callable
        atomic: Restore every field touched by this pass if a later field
            fails, whatever the step raised. Defaults to the `build.atomic`
            setting (off).

    Raises:
        ConfigurationError: If the record or configuration is malformed
        ValidationFailure: From the first chain that rejects a value
    """
    if record is None or not isinstance(record, MutableMapping):
        raise ConfigurationError(f"record must be a mutable mapping, got {type(record).__name__}")
    config = Configuration.from_mapping(configuration)
    if atomic is None:
        atomic = get_settings().build.atomic

    touched: list[tuple[str, Any]] = []
    try:
        for key, chain in config.items():
            present = key in record
            if not present and chain.optional:
                logger.debug("skipping optional field %r (absent)", key)
                continue
            seed = record[key] if present else MISSING
            result = chain.apply(seed, key, record)
            touched.append((key, seed))
            record[key] = result
    except Exception:
        if atomic and touched:
            logger.debug("initial pass failed on %r; restoring %d field(s)", key, len(touched))
            _restore(record, touched)
        raise

    logger.debug("watching %d field(s): %s", len(config), ", ".join(config))
    return Watched(record, config)


def _restore(record: Record, touched: list[tuple[str, Any]]) -> None:
    for key, previous in reversed(touched):
        if previous is MISSING:
            record.pop(key, None)
        else:
            record[key] = previous


watch = build
