"""Named digest algorithms from hashlib."""

from __future__ import annotations

import hashlib
from typing import Any

from ffprint.errors import ConfigError

DEFAULT_ALGORITHM = "sha256"


def new_hash(algorithm: str) -> Any:
    """Create a fresh hash object for ``algorithm``.

    Raises:
        ConfigError: If the algorithm is unknown or has no fixed digest size
    """
    try:
        hasher = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Unknown digest algorithm: {algorithm!r}") from e
    if hasher.digest_size == 0:
        raise ConfigError(f"Digest algorithm {algorithm!r} has no fixed digest size")
    return hasher


def hex_digest(data: str | bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Digest ``data`` (text is UTF-8 encoded) and return lower-case hex."""
    hasher = new_hash(algorithm)
    hasher.update(data.encode("utf-8") if isinstance(data, str) else data)
    return hasher.hexdigest().lower()
