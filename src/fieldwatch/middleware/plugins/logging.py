"""Logging step for middleware chains."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("fieldwatch.middleware")


@dataclass(slots=True)
class LoggingMiddleware:
    """Log every value that reaches this step, then pass it on unchanged.

    Place it last in a chain to log only writes that passed validation, or
    first to log every attempt. The old value is read from the record, so
    the log line shows the transition.

    Args:
        log: Logger instance to use (defaults to fieldwatch.middleware)
        log_values: Whether to include values in the log (default False for privacy)
        level: Log level for the record

    Example:
        >>> org = build(record, {"name": [is_string, LoggingMiddleware(log_values=True)]})
    """

    log: logging.Logger = field(default_factory=lambda: logger)
    log_values: bool = False
    level: int = logging.INFO

    def __call__(self, value: Any, key: str, record: MutableMapping[str, Any]) -> Any:
        if self.log_values:
            old = record.get(key, "<unset>")
            self.log.log(self.level, f"[{key}] set {old!r} -> {value!r}")
        else:
            self.log.log(self.level, f"[{key}] set")
        return value
