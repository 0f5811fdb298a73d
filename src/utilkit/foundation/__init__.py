"""Foundation - Core building blocks for utilkit.

Contains: error handling, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "UtilError", "UtilException", "AssertionFailure",
    # Config
    "UtilkitSettings", "get_settings", "clear_settings_cache",
    "LoggingSettings", "ConcurrencySettings",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "UtilError", "UtilException", "AssertionFailure"):
        from . import errors
        return getattr(errors, name)

    if name in ("UtilkitSettings", "get_settings", "clear_settings_cache",
                "LoggingSettings", "ConcurrencySettings"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
