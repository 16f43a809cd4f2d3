"""Version strings of ffprint and the external tools."""

from __future__ import annotations

import logging
import shutil

from ffprint._version import __version__
from ffprint.errors import ProbeFailed
from ffprint.models import ToolVersions
from ffprint.probes.base import run_tool

logger = logging.getLogger(__name__)


def trim_ff_version(raw: str) -> str:
    """Condense ``ffmpeg -version`` output, dropping the configuration line."""
    lines = [line.strip() for line in raw.splitlines()]
    return "; ".join(line for line in lines if line and not line.startswith("configuration:"))


def trim_mediainfo_version(raw: str) -> str:
    """Condense ``mediainfo --version`` output into one line."""
    lines = [line.strip().strip(",").strip() for line in raw.splitlines()]
    return ", ".join(line for line in lines if line)


def _query_version(executable: str, flag: str) -> str | None:
    if shutil.which(executable) is None:
        logger.warning("%s not found, its version is not recorded", executable)
        return None
    return run_tool([executable, flag], timeout=30)


def get_tool_versions(
    ffmpeg_path: str = "ffmpeg",
    ffprobe_path: str = "ffprobe",
    mediainfo_path: str | None = "mediainfo",
) -> ToolVersions:
    """Query the versions of ffmpeg, ffprobe and (optionally) MediaInfo.

    Tools that cannot be found are reported as None.

    Raises:
        ProbeFailed: If ffmpeg or ffprobe is installed but fails to report
            its version
    """
    versions = ToolVersions(ffprint=__version__)

    raw = _query_version(ffmpeg_path, "-version")
    versions.ffmpeg = trim_ff_version(raw) if raw is not None else None
    raw = _query_version(ffprobe_path, "-version")
    versions.ffprobe = trim_ff_version(raw) if raw is not None else None

    if mediainfo_path is not None:
        try:
            raw = _query_version(mediainfo_path, "--version")
        except ProbeFailed as e:
            logger.warning("Cannot read MediaInfo version: %s", e)
            raw = None
        versions.mediainfo = trim_mediainfo_version(raw) if raw is not None else None

    return versions
