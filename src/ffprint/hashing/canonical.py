"""Deterministic string form of metadata values.

Mappings are rendered with their keys sorted by code point, so two mappings
with the same items serialize identically regardless of insertion order.
Sequences keep their order; their elements are serialized recursively and
joined with commas, without delimiters of their own.

    >>> canonicalize({"b": 2, "a": [1, "x", None]})
    '{a:1,x,null,b:2}'
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ffprint.errors import UnsupportedValue


class _Missing:
    """Marker for an absent value."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _format_float(value: float) -> str:
    if not math.isfinite(value):
        raise UnsupportedValue(f"Non-finite number has no canonical form: {value!r}")
    if value.is_integer():
        return str(int(value))
    return repr(value)


def canonicalize(value: Any) -> str:
    """Return the canonical string form of ``value``.

    Raises:
        UnsupportedValue: If ``value`` (or anything nested in it) is absent
            or of a kind that cannot be serialized
    """
    if value is MISSING:
        raise UnsupportedValue("Absent values are not supported")
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(canonicalize(item) for item in value)
    if isinstance(value, Mapping):
        keys = list(value.keys())
        for key in keys:
            if not isinstance(key, str):
                raise UnsupportedValue(f"Mapping keys must be strings, got {key!r}")
        return (
            "{" + ",".join(f"{key}:{canonicalize(value[key])}" for key in sorted(keys)) + "}"
        )
    raise UnsupportedValue(f"The value is not supported: {value!r}")
