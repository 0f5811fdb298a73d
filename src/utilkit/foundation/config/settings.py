"""Environment-based configuration using pydantic-settings.

Example:
    >>> from utilkit.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # UTILKIT_LOG_LEVEL=DEBUG
    # UTILKIT_CONCURRENCY_DEFAULT_LIMIT=8
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="UTILKIT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ConcurrencySettings(BaseSettings):
    """Defaults for the concurrency helpers."""

    model_config = SettingsConfigDict(
        env_prefix="UTILKIT_CONCURRENCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_limit: PositiveInt | None = Field(
        default=None,
        description="Concurrency bound used by p() when none is given (None = unbounded)",
    )


class UtilkitSettings(BaseSettings):
    """Root settings for utilkit.

    Loads configuration from environment variables with UTILKIT_ prefix.

    Example environment variables:
        UTILKIT_LOG_LEVEL=DEBUG
        UTILKIT_LOG_FORMAT=json
        UTILKIT_CONCURRENCY_DEFAULT_LIMIT=4
    """

    model_config = SettingsConfigDict(
        env_prefix="UTILKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    concurrency: ConcurrencySettings = Field(default_factory=ConcurrencySettings)


@lru_cache(maxsize=1)
def get_settings() -> UtilkitSettings:
    """Get the global settings instance (cached)."""
    return UtilkitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
