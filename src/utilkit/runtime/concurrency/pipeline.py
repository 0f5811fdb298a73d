"""Lazy async map/filter pipelines with an optional concurrency bound.

``p(items)`` records ``map``/``filter`` stages without running anything.
Awaiting the instance runs every item through the stages, at most
``concurrency`` stage calls at a time, and returns results in input order
regardless of completion order.

``p()`` without items is an accumulator: ``add()`` awaitables over time,
then await the instance to collect their results in submission order.

Example:
    >>> await p([1, 2, 3, 4, 5]).map(triple).filter(is_even)
    [6, 12]

    >>> # At most 4 downloads at once
    >>> pages = await p(urls, concurrency=4).map(lambda url, _: fetch(url))

    >>> tasks = p()
    >>> tasks.add(save(a), save(b))
    >>> tasks.add(save(c))
    >>> await tasks  # [result_a, result_b, result_c]
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import inspect
from collections.abc import Awaitable, Callable, Generator, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, PositiveInt

from utilkit.foundation.config import get_settings
from utilkit.runtime.observability import get_logger

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")

__all__ = ["FilterStage", "MapStage", "PInstance", "POptions", "Stage", "p"]

_log = get_logger("utilkit.concurrency.pipeline")

# Marks an item dropped by a filter stage
_SKIP: Any = object()


# ─────────────────────────────────────────────────────────────────────────────
# Options & Stages
# ─────────────────────────────────────────────────────────────────────────────


class POptions(BaseModel):
    """Execution options for a pipeline.

    Attributes:
        concurrency: Max stage calls in flight at once (None = unbounded)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    concurrency: PositiveInt | None = None


@dataclass(slots=True, frozen=True)
class MapStage:
    """Replace each item with ``fn(item, index)``."""
    fn: Callable[[Any, int], Any]


@dataclass(slots=True, frozen=True)
class FilterStage:
    """Keep items for which ``predicate(item, index)`` is truthy."""
    predicate: Callable[[Any, int], Any]


Stage: TypeAlias = MapStage | FilterStage


# ─────────────────────────────────────────────────────────────────────────────
# Source handling
# ─────────────────────────────────────────────────────────────────────────────


class _Once:
    """Coroutine wrapper that starts its task on first use and can be awaited repeatedly."""

    __slots__ = ("_coro", "_task")

    def __init__(self, coro: Awaitable[Any]) -> None:
        self._coro: Awaitable[Any] | None = coro
        self._task: asyncio.Future[Any] | None = None

    def future(self) -> asyncio.Future[Any]:
        if self._task is None:
            self._task, self._coro = asyncio.ensure_future(self._coro), None  # type: ignore[arg-type]
        return self._task


def _reusable(item: Any) -> Any:
    return _Once(item) if inspect.iscoroutine(item) else item


class _Source:
    """Source items shared by an instance and the instances derived from it."""

    __slots__ = ("_raw", "_items")

    def __init__(self, raw: Iterable[Any] | Awaitable[Iterable[Any]] | None) -> None:
        self._raw = raw
        self._items: list[Any] | None = None

    async def resolve(self) -> list[Any]:
        if self._items is None:
            raw = self._raw
            if inspect.isawaitable(raw):
                self._raw = raw = asyncio.ensure_future(raw)
                raw = await raw
            if self._items is None:
                self._items = [_reusable(item) for item in (raw or ())]
        return self._items


async def _settle(entry: Any) -> Any:
    if isinstance(entry, _Once):
        return await entry.future()
    return await entry


async def _call(fn: Callable[[Any, int], Any], value: Any, index: int) -> Any:
    result = fn(value, index)
    return await result if inspect.isawaitable(result) else result


def _bounded(semaphore: asyncio.Semaphore | None) -> contextlib.AbstractAsyncContextManager[Any]:
    return semaphore if semaphore is not None else contextlib.nullcontext()


# ─────────────────────────────────────────────────────────────────────────────
# Pipeline
# ─────────────────────────────────────────────────────────────────────────────


class PInstance(Generic[T]):
    """Awaitable pipeline over a source plus items added via ``add``.

    Stages apply to every entry. Instances returned by ``map``/``filter``
    share the source but start with nothing added.
    """

    __slots__ = ("options", "_source", "_stages", "_collected", "_generation")

    def __init__(
        self,
        items: Iterable[Any] | Awaitable[Iterable[Any]] | None = None,
        options: POptions | None = None,
        *,
        stages: tuple[Stage, ...] = (),
    ) -> None:
        self.options = options or POptions(concurrency=get_settings().concurrency.default_limit)
        self._source = items if isinstance(items, _Source) else _Source(items)
        self._stages = stages
        self._collected: list[Any] = []
        self._generation = 0

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def _derive(self, stage: Stage) -> PInstance[Any]:
        return PInstance(self._source, self.options, stages=(*self._stages, stage))  # type: ignore[arg-type]

    def map(self, fn: Callable[[T, int], U | Awaitable[U]]) -> PInstance[U]:
        """Record a transformation stage. Nothing runs until awaited."""
        return self._derive(MapStage(fn))

    def filter(self, predicate: Callable[[T, int], object]) -> PInstance[T]:
        """Record a filter stage. Falsy results drop the item."""
        return self._derive(FilterStage(predicate))

    async def for_each(self, fn: Callable[[T, int], object]) -> None:
        """Run the pipeline, calling ``fn`` on every surviving item."""
        await self._execute((MapStage(fn),))

    async def reduce(self, reducer: Callable[[A, T], A], initial: A) -> A:
        """Run the pipeline, then fold the results left to right."""
        return functools.reduce(reducer, await self._execute(), initial)

    def add(self, *items: T | Awaitable[T]) -> None:
        """Append awaitables (or plain values) to be resolved on the next await."""
        self._collected.extend(_reusable(item) for item in items)

    def clear(self) -> None:
        """Drop added items without awaiting them."""
        self._collected.clear()
        self._generation += 1

    def __await__(self) -> Generator[Any, None, list[T]]:
        return self._execute().__await__()

    async def _execute(self, extra: tuple[Stage, ...] = ()) -> list[Any]:
        items = await self._source.resolve()
        snapshot, generation = list(self._collected), self._generation
        entries = [*items, *snapshot]
        stages = (*self._stages, *extra)
        limit = self.options.concurrency
        semaphore = asyncio.Semaphore(limit) if limit else None

        _log.debug("pipeline start", items=len(entries), stages=len(stages), concurrency=limit)
        try:
            results = await asyncio.gather(
                *(self._process(index, entry, stages, semaphore) for index, entry in enumerate(entries))
            )
        finally:
            # Anything added while running stays for the next await
            if snapshot and generation == self._generation:
                del self._collected[:len(snapshot)]

        output = [r for r in results if r is not _SKIP]
        _log.debug("pipeline done", items=len(entries), kept=len(output))
        return output

    @staticmethod
    async def _process(
        index: int,
        entry: Any,
        stages: tuple[Stage, ...],
        semaphore: asyncio.Semaphore | None,
    ) -> Any:
        if isinstance(entry, _Once) or inspect.isawaitable(entry):
            async with _bounded(semaphore):
                value = await _settle(entry)
        else:
            value = entry

        for stage in stages:
            match stage:
                case MapStage(fn):
                    async with _bounded(semaphore):
                        value = await _call(fn, value, index)
                case FilterStage(predicate):
                    async with _bounded(semaphore):
                        keep = await _call(predicate, value, index)
                    if not keep:
                        return _SKIP
        return value

    def __repr__(self) -> str:
        return f"PInstance(stages={len(self._stages)}, added={len(self._collected)}, options={self.options!r})"


def p(
    items: Iterable[T] | Awaitable[Iterable[T]] | None = None,
    *,
    concurrency: int | None = None,
) -> PInstance[T]:
    """Create a pipeline over ``items``, or an empty accumulator.

    Args:
        items: Values or awaitables, or an awaitable resolving to them
        concurrency: Max stage calls in flight (defaults to
            ``UTILKIT_CONCURRENCY_DEFAULT_LIMIT``, unbounded when unset)

    Raises:
        pydantic.ValidationError: If concurrency is not a positive integer
    """
    if concurrency is None:
        concurrency = get_settings().concurrency.default_limit
    return PInstance(items, POptions(concurrency=concurrency))
