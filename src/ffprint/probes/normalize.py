"""Normalization of probe JSON before hashing.

Both ffprobe and MediaInfo report most values as strings. Before hashing,
yes/no style strings become booleans, decimal strings become numbers, and
MediaInfo's ``@``-prefixed keys are renamed.
"""

from __future__ import annotations

import math
import re
from typing import Any

_BOOL_RE = re.compile(r"^(?:(?P<true>yes|true)|(?P<false>no|false))$", re.IGNORECASE)
_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?$")

RENAMED_KEYS = {
    "@type": "_type",
    "@typeorder": "_typeorder",
}


def convert_value(value: Any) -> Any:
    """Convert a boolean- or number-like string; other values pass through."""
    if not isinstance(value, str):
        return value
    match = _BOOL_RE.match(value)
    if match:
        return match.group("true") is not None
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        number = float(value)
        if math.isfinite(number):
            return number
    return value


def normalize(value: Any) -> Any:
    """Recursively convert values and rename keys in probe output."""
    if isinstance(value, dict):
        return {RENAMED_KEYS.get(key, key): normalize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize(item) for item in value]
    return convert_value(value)
