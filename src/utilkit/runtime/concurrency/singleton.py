"""Share one in-flight invocation of an async factory.

Every call made before ``reset()`` returns the same future, whether it is
still pending or already settled. Failures are cached as well: callers who
want a retry must ``reset()`` first.

Example:
    >>> @create_singleton_promise
    ... async def connect() -> Connection:
    ...     return await open_connection()
    >>>
    >>> a, b = connect(), connect()
    >>> a is b
    True
    >>> await connect.reset()  # next call opens a fresh connection
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from utilkit.runtime.observability import get_logger

T = TypeVar("T")

__all__ = ["SingletonPromise", "create_singleton_promise"]

_log = get_logger("utilkit.concurrency.singleton")


class SingletonPromise(Generic[T]):
    """Callable returning the current shared future of ``factory``.

    Each instance owns its stored future; two wrappers around the same
    factory do not share state.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        functools.update_wrapper(self, factory)
        self._factory = factory
        self._current: asyncio.Future[T] | None = None

    def __call__(self) -> asyncio.Future[T]:
        if self._current is None:
            _log.debug("singleton invoke", factory=_name_of(self._factory))
            self._current = asyncio.ensure_future(self._factory())
        return self._current

    def is_pending(self) -> bool:
        """Whether a stored invocation exists and has not settled yet."""
        return self._current is not None and not self._current.done()

    async def reset(self) -> None:
        """Wait for the stored invocation to settle, then forget it.

        The settled outcome is not delivered here; success and failure are
        both swallowed.
        """
        current = self._current
        if current is None:
            return
        # asyncio.wait does not cancel `current` if the caller is cancelled
        await asyncio.wait([current])
        if not current.cancelled() and (exc := current.exception()) is not None:
            _log.debug("singleton reset swallowed failure", factory=_name_of(self._factory), error=repr(exc))
        if self._current is current:
            self._current = None


def create_singleton_promise(factory: Callable[[], Awaitable[T]]) -> SingletonPromise[T]:
    """Wrap ``factory`` so concurrent callers share one invocation.

    Works as a plain function or as a decorator on a parameterless
    ``async def``.
    """
    return SingletonPromise(factory)


def _name_of(fn: Callable[..., object]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
