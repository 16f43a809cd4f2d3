"""MediaInfo enrichment of ffprobe output."""

from __future__ import annotations

import logging
import re
from typing import Any, ClassVar

from ffprint.probes.base import BaseProbe
from ffprint.probes.normalize import normalize

logger = logging.getLogger(__name__)

# StreamOrder values like "0-1" carry the stream id after the dash
_STREAM_ORDER_RE = re.compile(r"^\d+?-(?P<id>\d+?)$")


class MediaInfoProbe(BaseProbe):
    """Probe a media file with MediaInfo."""

    name: ClassVar[str] = "mediainfo"

    def __init__(self, executable: str = "mediainfo", timeout: float | None = 60) -> None:
        super().__init__(executable, timeout)

    def probe(self, path: str) -> dict[str, Any]:
        """Run MediaInfo and return its normalized JSON output."""
        return normalize(self._run_json(["--Output=JSON", path]))


def _tracks(mediainfo_data: dict[str, Any]) -> list[dict[str, Any]]:
    media = mediainfo_data.get("media")
    if not isinstance(media, dict):
        return []
    tracks = media.get("track")
    if not isinstance(tracks, list):
        return []
    return [track for track in tracks if isinstance(track, dict)]


def _track_matches(track: dict[str, Any], stream: dict[str, Any]) -> bool:
    if "id" in stream and track.get("ID") == stream["id"]:
        return True

    match = _STREAM_ORDER_RE.match(str(track["StreamOrder"])) if "StreamOrder" in track else None
    if match:
        track_index = int(match.group("id"))
    else:
        track_id = track.get("ID")
        if not isinstance(track_id, int) or isinstance(track_id, bool):
            return False
        track_index = track_id - 1
    return track_index == stream.get("index")


def enrich_with_mediainfo(
    probe_data: dict[str, Any], mediainfo_data: dict[str, Any]
) -> dict[str, Any]:
    """Attach MediaInfo tracks to normalized ffprobe output.

    The ``General`` track becomes ``format["media_info"]``; every stream gets
    the track matching it as ``media_info`` (None when there is none).

    Returns:
        ``probe_data``, modified in place
    """
    tracks = _tracks(mediainfo_data)

    general = next((track for track in tracks if track.get("_type") == "General"), None)
    probe_data.setdefault("format", {})["media_info"] = general

    for stream in probe_data.get("streams", []):
        stream["media_info"] = next(
            (track for track in tracks if _track_matches(track, stream)), None
        )

    logger.debug("Merged %d MediaInfo tracks", len(tracks))
    return probe_data
