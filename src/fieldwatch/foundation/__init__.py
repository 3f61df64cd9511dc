"""Foundation layer: errors, result monad, settings and logging setup."""

from .config import (
    BuildSettings,
    FieldwatchSettings,
    LoggingSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)
from .errors import (
    ConfigurationError,
    Err,
    ErrorCode,
    FieldError,
    FieldwatchError,
    Ok,
    Result,
    ValidationFailure,
    collect_results,
    sequence,
)

__all__ = [
    "BuildSettings", "FieldwatchSettings", "LoggingSettings",
    "clear_settings_cache", "configure_logging", "get_settings",
    "ConfigurationError", "ErrorCode", "FieldError", "FieldwatchError", "ValidationFailure",
    "Result", "Ok", "Err", "collect_results", "sequence",
]
