"""Track outstanding async work and wait for it to drain.

PromiseLock does not serialize execution: ``run`` starts the work right
away and only tracks its completion. ``wait()`` returns once nothing is
tracked anymore, including work submitted while it was already waiting.

Example:
    >>> lock = create_promise_lock()
    >>> lock.run(lambda: save(doc_a))
    >>> lock.run(lambda: save(doc_b))
    >>> lock.is_waiting()
    True
    >>> await lock.wait()
    >>> lock.is_waiting()
    False
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from utilkit.runtime.observability import get_logger

T = TypeVar("T")

__all__ = ["PromiseLock", "create_promise_lock"]

_log = get_logger("utilkit.concurrency.lock")


class PromiseLock:
    """Set of in-flight futures submitted through ``run``."""

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: list[asyncio.Future[object]] = []

    def run(self, factory: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Start ``factory()`` now and track it until it settles.

        Returns the tracked future itself, so awaiting it yields the real
        outcome, including any exception.
        """
        future = asyncio.ensure_future(factory())
        self._pending.append(future)
        future.add_done_callback(self._discard)
        return future

    async def wait(self) -> None:
        """Return once no tracked work is left.

        Member failures are not raised here; inspect the futures returned by
        ``run`` to observe them.
        """
        rounds = 0
        while self._pending:
            rounds += 1
            _log.debug("lock drain round", round=rounds, pending=len(self._pending))
            await asyncio.wait(list(self._pending))
        if rounds:
            _log.debug("lock drained", rounds=rounds)

    def is_waiting(self) -> bool:
        return bool(self._pending)

    def clear(self) -> None:
        """Forget all tracked work without waiting. Running work is not cancelled."""
        self._pending.clear()

    def _discard(self, future: asyncio.Future[object]) -> None:
        try:
            self._pending.remove(future)
        except ValueError:
            pass  # already dropped by clear()


def create_promise_lock() -> PromiseLock:
    """Create an independent PromiseLock."""
    return PromiseLock()
