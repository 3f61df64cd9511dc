"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from fieldwatch.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.build.atomic
    False
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # FIELDWATCH_BUILD__ATOMIC=true
    # FIELDWATCH_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration for the `fieldwatch` logger."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDWATCH_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "text"] = "text"
    include_timestamps: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class BuildSettings(BaseSettings):
    """Defaults for the initial middleware pass run by build()."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDWATCH_BUILD_",
        extra="ignore",
    )

    atomic: bool = Field(
        default=False,
        description="Restore every touched field when the initial pass fails",
    )


class FieldwatchSettings(BaseSettings):
    """Root settings for fieldwatch.

    Loads configuration from environment variables with FIELDWATCH_ prefix.

    Example environment variables:
        FIELDWATCH_DEBUG=true
        FIELDWATCH_LOG_LEVEL=DEBUG
        FIELDWATCH_BUILD__ATOMIC=true
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> FieldwatchSettings:
    """Get the global settings instance (cached)."""
    return FieldwatchSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from environment.
    """
    get_settings.cache_clear()
