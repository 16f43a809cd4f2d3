"""Fold per-entity digests into one composite fingerprint.

Chapter entries (``c:<id>``) and stream entries (``s:<index>``) are sorted
independently by digest, then id, so probing or scheduling order never
affects the result. The format entry is always appended last.
"""

from __future__ import annotations

from collections.abc import Iterable

from ffprint.hashing.canonical import canonicalize
from ffprint.hashing.digest import DEFAULT_ALGORITHM, hex_digest
from ffprint.models import (
    ChapterDescriptor,
    ChapterHashRecord,
    CombinedFingerprint,
    FormatDescriptor,
    StreamHashRecord,
)

CHAPTER_PREFIX = "c:"
STREAM_PREFIX = "s:"
FORMAT_ID = "format"


def hash_format(fmt: FormatDescriptor, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Digest the canonical form of the container format metadata."""
    return hex_digest(canonicalize(fmt), algorithm)


def hash_chapter(chapter: ChapterDescriptor, algorithm: str = DEFAULT_ALGORITHM) -> ChapterHashRecord:
    """Digest the canonical form of one chapter."""
    return ChapterHashRecord(
        id=chapter.id,
        digest=hex_digest(canonicalize(chapter.to_mapping()), algorithm),
    )


def _sorted_entries(entries: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    # entries are (id, digest)
    return sorted(entries, key=lambda entry: (entry[1], entry[0]))


def combine(
    format_digest: str,
    chapter_hashes: Iterable[ChapterHashRecord],
    stream_hashes: Iterable[StreamHashRecord],
    algorithm: str = DEFAULT_ALGORITHM,
) -> CombinedFingerprint:
    """Combine format, chapter and stream digests into the composite digest.

    Stream entries use the raw content digest, not the digest with properties.
    """
    chapters = _sorted_entries(
        (f"{CHAPTER_PREFIX}{record.id}", record.digest) for record in chapter_hashes
    )
    streams = _sorted_entries(
        (f"{STREAM_PREFIX}{record.index}", record.digest) for record in stream_hashes
    )
    entries = [*chapters, *streams, (FORMAT_ID, format_digest)]

    return CombinedFingerprint(
        composite_digest=hex_digest(",".join(digest for _, digest in entries), algorithm),
        provenance=tuple(entry_id for entry_id, _ in entries),
    )
