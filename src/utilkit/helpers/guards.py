"""Type guards, usable directly or as ``filter`` predicates.

Example:
    >>> list(filter(not_nullish, [1, None, 2]))
    [1, 2]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeGuard, TypeVar

T = TypeVar("T")

__all__ = [
    "is_bool",
    "is_def",
    "is_function",
    "is_number",
    "is_object",
    "is_string",
    "is_truthy",
    "not_nullish",
]


def not_nullish(v: T | None) -> TypeGuard[T]:
    return v is not None


def is_def(v: T | None) -> TypeGuard[T]:
    return v is not None


def is_truthy(v: object) -> bool:
    return bool(v)


def is_bool(v: object) -> TypeGuard[bool]:
    return isinstance(v, bool)


def is_function(v: object) -> TypeGuard[Callable[..., Any]]:
    return callable(v)


def is_number(v: object) -> TypeGuard[int | float]:
    """True for int and float; bools are excluded."""
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def is_string(v: object) -> TypeGuard[str]:
    return isinstance(v, str)


def is_object(v: object) -> TypeGuard[dict[Any, Any]]:
    """True for plain dicts."""
    return isinstance(v, dict)
