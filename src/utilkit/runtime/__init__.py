"""Runtime - async coordination and observability.

Contains: concurrency, observability.
"""

from __future__ import annotations

__all__ = [
    # Concurrency
    "ControlledPromise", "create_controlled_promise", "sleep",
    "PromiseLock", "create_promise_lock",
    "FilterStage", "MapStage", "PInstance", "POptions", "Stage", "p",
    "SingletonPromise", "create_singleton_promise",
    # Observability
    "BoundLogger", "ConsoleRenderer", "JsonRenderer", "LogEntry", "LogRenderer", "NoOpRenderer",
    "configure_logging", "get_logger", "log_context", "reset_logging",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ControlledPromise", "create_controlled_promise", "sleep",
                "PromiseLock", "create_promise_lock",
                "FilterStage", "MapStage", "PInstance", "POptions", "Stage", "p",
                "SingletonPromise", "create_singleton_promise"):
        from . import concurrency
        return getattr(concurrency, name)

    if name in ("BoundLogger", "ConsoleRenderer", "JsonRenderer", "LogEntry", "LogRenderer", "NoOpRenderer",
                "configure_logging", "get_logger", "log_context", "reset_logging"):
        from . import observability
        return getattr(observability, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
