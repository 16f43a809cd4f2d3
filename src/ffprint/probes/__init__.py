"""Probing tools feeding the fingerprinting engine."""

from ffprint.probes.base import BaseProbe, run_tool
from ffprint.probes.ffprobe import FFprobeProbe
from ffprint.probes.mediainfo import MediaInfoProbe, enrich_with_mediainfo
from ffprint.probes.normalize import convert_value, normalize
from ffprint.probes.versions import get_tool_versions, trim_ff_version, trim_mediainfo_version

__all__ = [
    # Base class
    "BaseProbe",
    "run_tool",
    # Probes
    "FFprobeProbe",
    "MediaInfoProbe",
    # Functions
    "enrich_with_mediainfo",
    "normalize",
    "convert_value",
    "get_tool_versions",
    "trim_ff_version",
    "trim_mediainfo_version",
]
