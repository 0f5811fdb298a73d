"""Small numeric helpers."""

from __future__ import annotations

from collections.abc import Iterable

from .array import flatten_arrayable

__all__ = ["clamp", "lerp", "remap", "sum_"]


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


def sum_(*args: float | Iterable[float]) -> float:
    """Sum numbers, flattening list arguments one level."""
    return sum(flatten_arrayable(list(args)), 0)


def lerp(lo: float, hi: float, t: float) -> float:
    """Linear interpolation between ``lo`` and ``hi``; ``t`` is clamped to [0, 1]."""
    return lo + (hi - lo) * clamp(t, 0.0, 1.0)


def remap(n: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map ``n`` from one range onto another, clamped to the output range.

    An empty input range maps everything to ``out_min``.
    """
    if in_max == in_min:
        return out_min
    return lerp(out_min, out_max, (n - in_min) / (in_max - in_min))
