"""ffprint - reproducible content fingerprints for media files.

Usage:
    from ffprint import fingerprint_file

    # Fingerprint a media file
    result = fingerprint_file("movie.mkv")
    print(result.composite_digest)

    # Which digests went into it, in fold order
    print(result.provenance)  # ['s:1', 's:0', 'format']

    # Per-stream digests survive remuxing into another container
    video = result.stream_hash(0)
    print(video.digest, video.digest_with_properties)

    # Export as JSON
    print(result.model_dump_json())
"""

from ffprint._version import __version__
from ffprint.config import FingerprintConfig, HashConfig, ToolsConfig, get_config, load_config
from ffprint.errors import (
    ConfigError,
    ExtractionFailed,
    FingerprintError,
    MetadataUnavailable,
    ProbeFailed,
    TimedOut,
    UnsupportedStreamType,
    UnsupportedValue,
)
from ffprint.fingerprint import Fingerprinter, fingerprint_file, fingerprint_files
from ffprint.formatters import format_hash, format_json, format_json_list, format_summary, to_dict
from ffprint.hashing import canonicalize, combine
from ffprint.models import (
    ChapterDescriptor,
    ChapterHashRecord,
    FileIdentity,
    FileTimes,
    FingerprintResult,
    MediaStreamDescriptor,
    ProbeResult,
    StreamHashRecord,
    ToolVersions,
)
from ffprint.utils import check_system_dependencies, print_dependency_status

__all__ = [
    # Version
    "__version__",
    # Main functions
    "Fingerprinter",
    "fingerprint_file",
    "fingerprint_files",
    "canonicalize",
    "combine",
    # Configuration
    "FingerprintConfig",
    "HashConfig",
    "ToolsConfig",
    "get_config",
    "load_config",
    # Models
    "FingerprintResult",
    "MediaStreamDescriptor",
    "ChapterDescriptor",
    "ProbeResult",
    "StreamHashRecord",
    "ChapterHashRecord",
    "FileIdentity",
    "FileTimes",
    "ToolVersions",
    # Errors
    "FingerprintError",
    "ConfigError",
    "UnsupportedValue",
    "UnsupportedStreamType",
    "MetadataUnavailable",
    "ExtractionFailed",
    "TimedOut",
    "ProbeFailed",
    # Formatters
    "format_json",
    "format_json_list",
    "format_hash",
    "format_summary",
    "to_dict",
    # Dependency functions
    "check_system_dependencies",
    "print_dependency_status",
]
