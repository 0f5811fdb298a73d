"""Time helpers."""

from __future__ import annotations

from time import time as _now

__all__ = ["timestamp"]


def timestamp() -> int:
    """Milliseconds since the Unix epoch."""
    return int(_now() * 1000)
