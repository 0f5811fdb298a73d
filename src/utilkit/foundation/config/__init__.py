"""Configuration management using pydantic-settings."""

from .settings import (
    ConcurrencySettings,
    LoggingSettings,
    UtilkitSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ConcurrencySettings",
    "LoggingSettings",
    "UtilkitSettings",
    "clear_settings_cache",
    "get_settings",
]
