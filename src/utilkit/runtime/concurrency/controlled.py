"""Externally completed futures and a sleep helper.

A ControlledPromise is a future whose completion is triggered from outside
the computation that awaits it. Only the first ``resolve``/``reject`` has an
effect; later calls are ignored.

Example:
    >>> promise = create_controlled_promise()
    >>> loop.call_later(0.1, promise.resolve, "ready")
    >>> await promise
    'ready'

    >>> # Timeouts are composed by the caller
    >>> await asyncio.wait_for(promise, timeout=5)
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

__all__ = ["ControlledPromise", "create_controlled_promise", "sleep"]


class ControlledPromise(Generic[T]):
    """Awaitable future completed by ``resolve`` or ``reject``.

    Attributes:
        future: Underlying asyncio future
    """

    __slots__ = ("future",)

    def __init__(self, *, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.future: asyncio.Future[T] = (loop or asyncio.get_running_loop()).create_future()

    def resolve(self, value: T) -> None:
        """Fulfill with value. No-op once settled."""
        if not self.future.done():
            self.future.set_result(value)

    def reject(self, error: BaseException | type[BaseException]) -> None:
        """Reject with error. No-op once settled."""
        if not self.future.done():
            self.future.set_exception(error)

    def done(self) -> bool:
        return self.future.done()

    def __await__(self) -> Generator[Any, None, T]:
        return self.future.__await__()

    def __repr__(self) -> str:
        return f"ControlledPromise({self.future!r})"


def create_controlled_promise(*, loop: asyncio.AbstractEventLoop | None = None) -> ControlledPromise[Any]:
    """Create a promise that can be resolved or rejected from the outside.

    Must be called with a running event loop unless ``loop`` is given.
    """
    return ControlledPromise(loop=loop)


async def sleep(ms: float, callback: Callable[[], object] | None = None) -> None:
    """Suspend for ``ms`` milliseconds, then run ``callback`` if given.

    An awaitable returned by the callback is awaited before returning.
    """
    await asyncio.sleep(ms / 1000)
    if callback is not None:
        result = callback()
        if inspect.isawaitable(result):
            await result
