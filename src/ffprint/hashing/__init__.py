"""Fingerprint hashing engine."""

from .canonical import MISSING, canonicalize
from .combine import FORMAT_ID, combine, hash_chapter, hash_format
from .digest import DEFAULT_ALGORITHM, hex_digest, new_hash
from .properties import canonical_stream_properties, digest_with_properties, select_stream_properties
from .scheduler import ConcurrentHashScheduler, StreamHashTask
from .stream import BoundedStreamHasher, HashState, build_extract_command

__all__ = [
    # Canonical serialization
    "MISSING",
    "canonicalize",
    # Digests
    "DEFAULT_ALGORITHM",
    "hex_digest",
    "new_hash",
    # Stream properties
    "select_stream_properties",
    "canonical_stream_properties",
    "digest_with_properties",
    # Stream hashing
    "BoundedStreamHasher",
    "HashState",
    "build_extract_command",
    "ConcurrentHashScheduler",
    "StreamHashTask",
    # Combination
    "FORMAT_ID",
    "combine",
    "hash_chapter",
    "hash_format",
]
