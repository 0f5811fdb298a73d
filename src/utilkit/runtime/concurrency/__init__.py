"""Promise-style coordination primitives for asyncio.

Key Components:
    - p: Lazy map/filter pipelines with a concurrency bound, and an
      accumulator for collecting awaitables over time
    - create_singleton_promise: One shared in-flight invocation per reset
    - create_promise_lock: Track outstanding work and wait for it to drain
    - create_controlled_promise: Futures completed from the outside
    - sleep: Millisecond sleep with an optional callback

All primitives assume a single event loop; instance state is owned by the
returned object and needs no locking between await points.

Example:
    >>> from utilkit.runtime.concurrency import p, create_promise_lock
    >>>
    >>> evens = await p([1, 2, 3, 4, 5]).map(triple).filter(is_even)
    >>>
    >>> lock = create_promise_lock()
    >>> lock.run(lambda: flush(buffer))
    >>> await lock.wait()
"""

from __future__ import annotations

from .controlled import ControlledPromise, create_controlled_promise, sleep
from .lock import PromiseLock, create_promise_lock
from .pipeline import FilterStage, MapStage, PInstance, POptions, Stage, p
from .singleton import SingletonPromise, create_singleton_promise

__all__ = [
    # Controlled futures
    "ControlledPromise",
    "create_controlled_promise",
    "sleep",
    # Lock
    "PromiseLock",
    "create_promise_lock",
    # Pipeline
    "FilterStage",
    "MapStage",
    "PInstance",
    "POptions",
    "Stage",
    "p",
    # Singleton
    "SingletonPromise",
    "create_singleton_promise",
]
