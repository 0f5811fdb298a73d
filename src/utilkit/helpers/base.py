"""Basic runtime helpers: assertions, type names, no-op."""

from __future__ import annotations

from typing import Any

from utilkit.foundation.errors import AssertionFailure

__all__ = ["assert_", "get_type_name", "noop", "to_string"]


def assert_(condition: object, message: str) -> None:
    """Raise AssertionFailure with ``message`` unless ``condition`` is truthy.

    Unlike the ``assert`` statement this is never stripped by ``-O``.
    """
    if not condition:
        raise AssertionFailure.with_message(message)


def to_string(v: object) -> str:
    """Tag-style description of a value's type, e.g. ``[object dict]``."""
    return f"[object {type(v).__name__}]"


def get_type_name(v: object) -> str:
    """Lowercase type name; ``"none"`` for None."""
    if v is None:
        return "none"
    return type(v).__name__.lower()


def noop(*_: Any, **__: Any) -> None:
    pass
