"""Utilkit - small, independent helpers for everyday Python.

Import only what you need. The concurrency helpers coordinate asyncio work;
the rest are plain stateless functions.

Concurrency:
    >>> from utilkit import p, create_singleton_promise, create_promise_lock
    >>>
    >>> # Bounded, order-preserving async pipeline
    >>> await p([1, 2, 3, 4, 5], concurrency=2).map(triple).filter(is_even)
    [6, 12]
    >>>
    >>> # Share one in-flight call
    >>> @create_singleton_promise
    ... async def load_config() -> dict: ...
    >>>
    >>> # Wait for fire-and-forget work to drain
    >>> lock = create_promise_lock()
    >>> lock.run(lambda: flush())
    >>> await lock.wait()

Helpers:
    >>> from utilkit import uniq, deep_merge, template
    >>> uniq([1, 1, 2])
    [1, 2]

Configuration is read from ``UTILKIT_*`` environment variables (see
``utilkit.foundation.config``).
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import AssertionFailure, ErrorCode, UtilError, UtilException

# Config
from .foundation.config import UtilkitSettings, clear_settings_cache, get_settings

# Logging
from .runtime.observability import configure_logging, get_logger, log_context

# Concurrency
from .runtime.concurrency import (
    ControlledPromise,
    PInstance,
    POptions,
    PromiseLock,
    SingletonPromise,
    create_controlled_promise,
    create_promise_lock,
    create_singleton_promise,
    p,
    sleep,
)

# Helpers
from .helpers import *  # noqa: F403
from .helpers import __all__ as _helpers_all

__all__ = [
    "__version__",
    # Errors
    "AssertionFailure", "ErrorCode", "UtilError", "UtilException",
    # Config
    "UtilkitSettings", "clear_settings_cache", "get_settings",
    # Logging
    "configure_logging", "get_logger", "log_context",
    # Concurrency
    "ControlledPromise", "PInstance", "POptions", "PromiseLock", "SingletonPromise",
    "create_controlled_promise", "create_promise_lock", "create_singleton_promise", "p", "sleep",
    # Helpers
    *_helpers_all,
]
