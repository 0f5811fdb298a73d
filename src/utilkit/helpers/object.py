"""Dict helpers.

``deep_merge`` mutates and returns its target, merging nested dicts and
replacing everything else; ``deep_merge_with_array`` also concatenates lists.

Example:
    >>> deep_merge({"a": {"x": 1}}, {"a": {"y": 2}})
    {'a': {'x': 1, 'y': 2}}
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

K = TypeVar("K")
V = TypeVar("V")
K2 = TypeVar("K2")
V2 = TypeVar("V2")

__all__ = [
    "clear_undefined",
    "deep_merge",
    "deep_merge_with_array",
    "has_own_property",
    "is_key_of",
    "is_mergeable_object",
    "object_entries",
    "object_keys",
    "object_map",
    "object_pick",
]


def object_map(obj: Mapping[K, V], fn: Callable[[K, V], tuple[K2, V2] | None]) -> dict[K2, V2]:
    """Map entries through ``fn(key, value)``; returning None drops the entry."""
    return dict(pair for key, value in obj.items() if (pair := fn(key, value)) is not None)


def is_key_of(obj: Mapping[Any, Any], key: object) -> bool:
    return key in obj


def object_keys(obj: Mapping[K, Any]) -> list[K]:
    return list(obj.keys())


def object_entries(obj: Mapping[K, V]) -> list[tuple[K, V]]:
    return list(obj.items())


def is_mergeable_object(item: object) -> bool:
    return isinstance(item, dict)


def _merge(target: dict[Any, Any], source: Mapping[Any, Any], *, concat_lists: bool) -> None:
    for key, value in source.items():
        if concat_lists and isinstance(value, list):
            existing = target.get(key)
            if isinstance(existing, list):
                existing.extend(value)
            else:
                target[key] = list(value)
        elif is_mergeable_object(value):
            existing = target.setdefault(key, {})
            if is_mergeable_object(existing):
                _merge(existing, value, concat_lists=concat_lists)
            else:
                target[key] = value
        else:
            target[key] = value


def deep_merge(target: dict[Any, Any], *sources: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """Recursively merge ``sources`` into ``target`` (in place). Lists are replaced."""
    for source in sources:
        if source is not None and is_mergeable_object(target) and is_mergeable_object(source):
            _merge(target, source, concat_lists=False)
    return target


def deep_merge_with_array(target: dict[Any, Any], *sources: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """Like ``deep_merge`` but lists found at the same key are concatenated."""
    for source in sources:
        if source is not None and is_mergeable_object(target) and is_mergeable_object(source):
            _merge(target, source, concat_lists=True)
    return target


def object_pick(obj: Mapping[K, V], keys: Iterable[K], omit_none: bool = False) -> dict[K, V]:
    """Subset of ``obj`` with the given keys. Missing keys are skipped."""
    return {k: obj[k] for k in keys if k in obj and not (omit_none and obj[k] is None)}


def clear_undefined(obj: dict[K, V]) -> dict[K, V]:
    """Delete keys whose value is None, in place."""
    for key in [k for k, v in obj.items() if v is None]:
        del obj[key]
    return obj


def has_own_property(obj: object, key: object) -> bool:
    if obj is None:
        return False
    if isinstance(obj, Mapping):
        return key in obj
    return isinstance(key, str) and key in getattr(obj, "__dict__", {})
