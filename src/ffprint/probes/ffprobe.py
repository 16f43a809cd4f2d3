"""FFprobe probing of format, streams and chapters."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from ffprint.probes.base import BaseProbe
from ffprint.probes.normalize import normalize

logger = logging.getLogger(__name__)


class FFprobeProbe(BaseProbe):
    """Probe a media file with FFprobe.

    Produces the ``format``, ``streams`` and ``chapters`` sections. Missing
    stream or chapter lists become empty lists, and every stream gets a
    ``tags`` mapping even when ffprobe reports none.
    """

    name: ClassVar[str] = "ffprobe"

    def __init__(self, executable: str = "ffprobe", timeout: float | None = 60) -> None:
        super().__init__(executable, timeout)

    def probe(self, path: str, include_chapters: bool = True) -> dict[str, Any]:
        """Run ffprobe and return its normalized JSON output."""
        args = ["-v", "quiet", "-print_format", "json", "-show_streams", "-show_format"]
        if include_chapters:
            args.append("-show_chapters")
        args.append(path)

        data = normalize(self._run_json(args))

        if not isinstance(data.get("format"), dict):
            data["format"] = {}
        if not isinstance(data.get("streams"), list):
            data["streams"] = []
        if not include_chapters or not isinstance(data.get("chapters"), list):
            data["chapters"] = []

        for stream in data["streams"]:
            if isinstance(stream, dict) and not isinstance(stream.get("tags"), dict):
                stream["tags"] = {}

        logger.info(
            "Found %d streams and %d chapters in %s",
            len(data["streams"]),
            len(data["chapters"]),
            path,
        )
        return data
