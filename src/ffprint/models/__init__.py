"""Pydantic models for ffprint."""

from .descriptors import ChapterDescriptor, FormatDescriptor, MediaStreamDescriptor, ProbeResult
from .file import FileIdentity, FileTimes, format_size
from .hashes import ChapterHashRecord, CombinedFingerprint, StreamContentDigest, StreamHashRecord
from .properties import (
    PROPERTY_VARIANTS,
    AudioProperties,
    StreamProperties,
    SubtitleProperties,
    VideoProperties,
)
from .result import FingerprintResult, ToolVersions

__all__ = [
    # Main model
    "FingerprintResult",
    "ToolVersions",
    # Descriptors
    "FormatDescriptor",
    "MediaStreamDescriptor",
    "ChapterDescriptor",
    "ProbeResult",
    # Stream properties
    "StreamProperties",
    "AudioProperties",
    "VideoProperties",
    "SubtitleProperties",
    "PROPERTY_VARIANTS",
    # Hash records
    "StreamContentDigest",
    "StreamHashRecord",
    "ChapterHashRecord",
    "CombinedFingerprint",
    # File
    "FileIdentity",
    "FileTimes",
    "format_size",
]
