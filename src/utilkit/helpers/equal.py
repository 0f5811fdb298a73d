"""Structural deep equality."""

from __future__ import annotations

import math

from .base import get_type_name

__all__ = ["is_deep_equal"]


def is_deep_equal(a: object, b: object) -> bool:
    """Compare values recursively.

    Values of different types are never equal (``1`` vs ``1.0``, ``1`` vs
    ``True``). Lists and tuples compare item by item, dicts by key set and
    values. NaN equals NaN.
    """
    if get_type_name(a) != get_type_name(b):
        return False
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(is_deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(is_deep_equal(v, b[k]) for k, v in a.items())
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a is b or a == b
