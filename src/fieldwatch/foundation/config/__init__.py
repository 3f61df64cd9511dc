"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .logging import JsonFormatter, configure_logging
from .settings import (
    BuildSettings,
    FieldwatchSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BuildSettings",
    "FieldwatchSettings",
    "JsonFormatter",
    "LoggingSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
