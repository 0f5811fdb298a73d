"""Function call helpers."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

__all__ = ["batch_invoke", "invoke", "tap"]


def batch_invoke(functions: Iterable[Callable[[], object] | None]) -> None:
    """Call every function, skipping None entries."""
    for fn in functions:
        if fn is not None:
            fn()


def invoke(fn: Callable[[], T]) -> T:
    return fn()


def tap(value: T, callback: Callable[[T], object]) -> T:
    """Pass ``value`` to ``callback`` and return it unchanged.

    Example:
        >>> tap({}, lambda d: d.update(a=1))
        {'a': 1}
    """
    callback(value)
    return value
