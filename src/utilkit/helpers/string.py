"""String helpers."""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Mapping
from typing import Any

__all__ = [
    "capitalize",
    "ensure_prefix",
    "ensure_suffix",
    "random_str",
    "slash",
    "template",
    "unindent",
]

URL_ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"

_RE_NAMED = re.compile(r"\{(\w+)\}")
_RE_INDEXED = re.compile(r"\{(\d+)\}")
_RE_LEADING_WS = re.compile(r"^\s*")


def slash(s: str) -> str:
    """Replace backslashes with forward slashes."""
    return s.replace("\\", "/")


def ensure_prefix(prefix: str, s: str) -> str:
    return s if s.startswith(prefix) else prefix + s


def ensure_suffix(suffix: str, s: str) -> str:
    return s if s.endswith(suffix) else s + suffix


def template(s: str, *args: Any) -> str:
    """Fill ``{0}``-style placeholders from args, or ``{name}`` ones from a mapping.

    Example:
        >>> template("Hello {0}! My name is {1}.", "Inès", "Anthony")
        'Hello Inès! My name is Anthony.'
        >>> template("{greet}! {name}", {"greet": "Hi"}, "there")
        'Hi! there'

    With a mapping, the second argument is a fallback for missing or falsy
    values: a string, or a callable receiving the key. Without a fallback
    the key itself is used. Indices with no argument are left untouched.
    """
    if args and isinstance(args[0], Mapping):
        variables: Mapping[str, Any] = args[0]
        fallback: str | Callable[[str], str] | None = args[1] if len(args) > 1 else None

        def named(match: re.Match[str]) -> str:
            key = match.group(1)
            if value := variables.get(key):
                return str(value)
            resolved = fallback(key) if callable(fallback) else fallback
            return key if resolved is None else str(resolved)

        return _RE_NAMED.sub(named, s)

    def indexed(match: re.Match[str]) -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    return _RE_INDEXED.sub(indexed, s)


def random_str(size: int = 16, alphabet: str = URL_ALPHABET) -> str:
    """Random string drawn from ``alphabet``. Not suitable for secrets."""
    return "".join(random.choice(alphabet) for _ in range(size))


def capitalize(s: str) -> str:
    """First character upper-case, the rest lower-case."""
    return s[:1].upper() + s[1:].lower()


def unindent(s: str) -> str:
    """Strip the common indentation and leading/trailing blank lines."""
    lines = s.split("\n")
    blank = [not line.strip() for line in lines]
    indents = [len(_RE_LEADING_WS.match(line).group(0)) for line, b in zip(lines, blank) if not b]  # type: ignore[union-attr]
    if not indents:
        return ""
    common = min(indents)
    head = blank.index(False)
    tail = len(lines) - blank[::-1].index(False)
    return "\n".join(line[common:] for line in lines[head:tail])
