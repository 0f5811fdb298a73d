"""List helpers.

"Arrayable" values are either a single item or a list/tuple of items;
``None`` counts as an empty list.

Example:
    >>> to_array(None), to_array(1), to_array([1, 2])
    ([], [1], [1, 2])
    >>> partition([1, 2, 3, 4], lambda i: i % 2 == 0)
    ([2, 4], [1, 3])
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

__all__ = [
    "at",
    "clamp_array_range",
    "flatten_arrayable",
    "last",
    "merge_arrayable",
    "move",
    "partition",
    "range_",
    "remove",
    "sample",
    "shuffle",
    "to_array",
    "uniq",
    "unique_by",
]


def to_array(value: T | list[T] | tuple[T, ...] | None = None) -> list[T]:
    """Wrap a single value in a list. Lists are returned as-is; tuples are copied."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def flatten_arrayable(array: Sequence[T | list[T] | tuple[T, ...] | None] | None) -> list[T]:
    """Flatten one level; ``None`` entries are dropped."""
    return [item for entry in to_array(array) for item in to_array(entry)]  # type: ignore[arg-type]


def merge_arrayable(*args: T | list[T] | tuple[T, ...] | None) -> list[T]:
    return [item for arg in args for item in to_array(arg)]


def partition(array: Sequence[T], *predicates: Callable[[T], object]) -> tuple[list[T], ...]:
    """Split by predicates. Each item lands in the first bucket whose predicate
    matches; the last bucket holds items no predicate matched.
    """
    buckets: tuple[list[T], ...] = tuple([] for _ in range(len(predicates) + 1))
    for item in array:
        index = next((i for i, predicate in enumerate(predicates) if predicate(item)), len(predicates))
        buckets[index].append(item)
    return buckets


def uniq(array: Sequence[T]) -> list[T]:
    """Drop duplicates, keeping first occurrences. Works with unhashable items."""
    seen: set[object] = set()
    unhashable: list[object] = []
    result: list[T] = []
    for item in array:
        try:
            if item in seen:
                continue
            seen.add(item)
        except TypeError:
            if item in unhashable:
                continue
            unhashable.append(item)
        result.append(item)
    return result


def unique_by(array: Sequence[T], equal: Callable[[T, T], bool]) -> list[T]:
    """Drop items considered equal to an earlier kept item."""
    result: list[T] = []
    for item in array:
        if not any(equal(kept, item) for kept in result):
            result.append(item)
    return result


def last(array: Sequence[T]) -> T | None:
    return array[-1] if array else None


def remove(array: list[T], value: T) -> bool:
    """Remove the first occurrence of ``value`` in place. Returns whether one was found."""
    try:
        array.remove(value)
    except ValueError:
        return False
    return True


def at(array: Sequence[T], index: int) -> T | None:
    """Item at ``index`` (negative counts from the end), None when out of range."""
    if not array:
        return None
    if index < 0:
        index += len(array)
    return array[index] if 0 <= index < len(array) else None


def range_(*args: float) -> list[float]:
    """``range_(stop)`` or ``range_(start, stop, step=1)``; floats are allowed.

    A zero step is treated as 1.

    Raises:
        ValueError: If step is negative
    """
    if len(args) == 1:
        start, stop, step = 0, args[0], 1
    elif len(args) in (2, 3):
        start, stop, step = args[0], args[1], (args[2] if len(args) == 3 else 1)
    else:
        raise TypeError(f"range_() takes 1 to 3 arguments ({len(args)} given)")
    step = step or 1
    if step < 0:
        raise ValueError("range_() step must be positive")
    result: list[float] = []
    current = start
    while current < stop:
        result.append(current)
        current += step
    return result


def move(array: list[T], src: int, dst: int) -> list[T]:
    """Move the item at ``src`` to ``dst`` in place."""
    array.insert(dst, array.pop(src))
    return array


def clamp_array_range(n: int, array: Sequence[object]) -> int:
    """Clamp ``n`` to a valid index of ``array``."""
    return min(len(array) - 1, max(0, n))


def sample(array: Sequence[T], quantity: int) -> list[T]:
    """Pick ``quantity`` random items, with replacement."""
    return [random.choice(array) for _ in range(quantity)]


def shuffle(array: list[T]) -> list[T]:
    """Shuffle in place and return the same list."""
    random.shuffle(array)
    return array
