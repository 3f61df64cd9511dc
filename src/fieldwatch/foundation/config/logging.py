"""Logging setup for the `fieldwatch` logger hierarchy.

The library only emits records through named stdlib loggers
(`fieldwatch.watch`, `fieldwatch.middleware`). Applications that want to see
them call configure_logging() once at startup.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Literal, TextIO

from .settings import get_settings

if TYPE_CHECKING:
    from .settings import FieldwatchSettings

ROOT_LOGGER = "fieldwatch"

_TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
_TEXT_FORMAT_TS = "%(asctime)s " + _TEXT_FORMAT


class JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, event."""

    def __init__(self, *, include_timestamps: bool = True) -> None:
        super().__init__()
        self.include_timestamps = include_timestamps

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if self.include_timestamps:
            entry["ts"] = self.formatTime(record)
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str | None = None,
    *,
    format: Literal["json", "text"] | None = None,
    stream: TextIO | None = None,
    settings: FieldwatchSettings | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the `fieldwatch` logger.

    Explicit arguments override the values loaded from settings. Calling it
    again replaces the handler installed by the previous call.
    """
    cfg = settings or get_settings()
    fmt = format or cfg.logging.format

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name("fieldwatch")
    if fmt == "json":
        handler.setFormatter(JsonFormatter(include_timestamps=cfg.logging.include_timestamps))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT_TS if cfg.logging.include_timestamps else _TEXT_FORMAT))

    log = logging.getLogger(ROOT_LOGGER)
    for existing in [h for h in log.handlers if h.get_name() == "fieldwatch"]:
        log.removeHandler(existing)
    log.addHandler(handler)
    log.setLevel(level.upper() if level else cfg.effective_log_level)
    return log
