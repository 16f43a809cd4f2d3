"""Fingerprint result model."""

from typing import Any

from pydantic import BaseModel, Field

from .descriptors import ChapterDescriptor, FormatDescriptor, MediaStreamDescriptor
from .file import FileIdentity, FileTimes
from .hashes import ChapterHashRecord, StreamHashRecord


class ToolVersions(BaseModel):
    """Versions of ffprint and the external tools involved."""

    ffprint: str
    ffmpeg: str | None = None
    ffprobe: str | None = None
    mediainfo: str | None = None


class FingerprintResult(BaseModel):
    """Everything produced by fingerprinting one file.

    - file_identity / timestamps: which file, and when
    - format / streams / chapters: the probed descriptors
    - format_digest, chapter_hashes, stream_hashes: per-entity digests
    - composite_digest / provenance: the fingerprint and the ids it covers

    Digest fields stay empty when hashing was skipped.
    """

    file_identity: FileIdentity
    timestamps: FileTimes
    format: FormatDescriptor = Field(default_factory=dict)
    streams: list[MediaStreamDescriptor] = Field(default_factory=list)
    chapters: list[ChapterDescriptor] = Field(default_factory=list)
    hash_config: dict[str, Any] | None = None
    format_digest: str | None = None
    chapter_hashes: list[ChapterHashRecord] = Field(default_factory=list)
    stream_hashes: list[StreamHashRecord] = Field(default_factory=list)
    composite_digest: str | None = None
    provenance: list[str] = Field(default_factory=list)
    tool_versions: ToolVersions | None = None

    @property
    def fingerprint(self) -> str | None:
        """Return the composite digest."""
        return self.composite_digest

    def stream_hash(self, index: int) -> StreamHashRecord | None:
        """Return the hash record of the stream with ``index``, if hashed."""
        for record in self.stream_hashes:
            if record.index == index:
                return record
        return None
