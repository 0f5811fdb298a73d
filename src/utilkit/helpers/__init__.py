"""Stateless helpers for lists, dicts, strings, numbers and type checks.

Each helper is a plain synchronous function with no shared state, meant
to be imported piecemeal:

    >>> from utilkit.helpers import uniq, deep_merge, template
"""

from __future__ import annotations

from .array import (
    at,
    clamp_array_range,
    flatten_arrayable,
    last,
    merge_arrayable,
    move,
    partition,
    range_,
    remove,
    sample,
    shuffle,
    to_array,
    uniq,
    unique_by,
)
from .base import assert_, get_type_name, noop, to_string
from .equal import is_deep_equal
from .function import batch_invoke, invoke, tap
from .guards import (
    is_bool,
    is_def,
    is_function,
    is_number,
    is_object,
    is_string,
    is_truthy,
    not_nullish,
)
from .math import clamp, lerp, remap, sum_
from .object import (
    clear_undefined,
    deep_merge,
    deep_merge_with_array,
    has_own_property,
    is_key_of,
    is_mergeable_object,
    object_entries,
    object_keys,
    object_map,
    object_pick,
)
from .string import capitalize, ensure_prefix, ensure_suffix, random_str, slash, template, unindent
from .time import timestamp

__all__ = [
    # Array
    "at", "clamp_array_range", "flatten_arrayable", "last", "merge_arrayable", "move",
    "partition", "range_", "remove", "sample", "shuffle", "to_array", "uniq", "unique_by",
    # Base
    "assert_", "get_type_name", "noop", "to_string",
    # Equality
    "is_deep_equal",
    # Function
    "batch_invoke", "invoke", "tap",
    # Guards
    "is_bool", "is_def", "is_function", "is_number", "is_object", "is_string", "is_truthy", "not_nullish",
    # Math
    "clamp", "lerp", "remap", "sum_",
    # Object
    "clear_undefined", "deep_merge", "deep_merge_with_array", "has_own_property", "is_key_of",
    "is_mergeable_object", "object_entries", "object_keys", "object_map", "object_pick",
    # String
    "capitalize", "ensure_prefix", "ensure_suffix", "random_str", "slash", "template", "unindent",
    # Time
    "timestamp",
]
