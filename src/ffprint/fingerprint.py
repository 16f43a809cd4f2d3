"""Fingerprinting sessions."""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import Iterable
from datetime import datetime, timezone

from ffprint.config import FingerprintConfig, HashConfig, get_config
from ffprint.errors import FingerprintError
from ffprint.hashing import (
    BoundedStreamHasher,
    ConcurrentHashScheduler,
    canonical_stream_properties,
    combine,
    digest_with_properties,
    hash_chapter,
    hash_format,
)
from ffprint.models import (
    ChapterHashRecord,
    FileIdentity,
    FileTimes,
    FingerprintResult,
    MediaStreamDescriptor,
    ProbeResult,
    StreamHashRecord,
    ToolVersions,
)
from ffprint.probes import FFprobeProbe, MediaInfoProbe, enrich_with_mediainfo, get_tool_versions

logger = logging.getLogger(__name__)


def get_file_identity(path: str) -> FileIdentity:
    """Get the identity of a file.

    Args:
        path: Path to the file

    Returns:
        FileIdentity with absolute path, name, directory and size
    """
    abs_path = os.path.abspath(path)
    return FileIdentity(
        path=abs_path,
        name=os.path.basename(abs_path),
        directory=os.path.dirname(abs_path),
        size_bytes=os.stat(path).st_size,
    )


def get_file_times(path: str, hash_time: datetime | None = None) -> FileTimes:
    """Get a file's timestamps (UTC) together with the hash time."""
    stat = os.stat(path)

    def utc(timestamp: float) -> datetime:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    # st_birthtime is not available everywhere
    birthtime = getattr(stat, "st_birthtime", None)
    return FileTimes(
        hash_time=hash_time or datetime.now(timezone.utc),
        accessed=utc(stat.st_atime),
        modified=utc(stat.st_mtime),
        changed=utc(stat.st_ctime),
        created=utc(birthtime) if birthtime else None,
    )


def select_streams(
    streams: Iterable[MediaStreamDescriptor], hash_config: HashConfig
) -> list[MediaStreamDescriptor]:
    """Pick the streams to hash: explicit ids if given, else by codec type."""
    if hash_config.stream_ids:
        wanted = set(hash_config.stream_ids)
        return [stream for stream in streams if stream.index in wanted]
    types = set(hash_config.stream_types)
    return [stream for stream in streams if stream.codec_type in types]


class Fingerprinter:
    """Fingerprinting session for one target file.

    The last result is cached until the target changes::

        fp = Fingerprinter("movie.mkv")
        result = await fp.fingerprint()
        print(result.composite_digest)

        fp.retarget("movie-remux.mkv")  # drops the cached result
    """

    def __init__(self, file: str, config: FingerprintConfig | None = None) -> None:
        self._file = file
        self.config = config or get_config()
        self.config.hash.validate()
        self._result: FingerprintResult | None = None

    @property
    def file(self) -> str:
        """Return the target file."""
        return self._file

    @file.setter
    def file(self, value: str) -> None:
        self.retarget(value)

    @property
    def result(self) -> FingerprintResult | None:
        """Return the cached result, or None if not fingerprinted yet."""
        return self._result

    def retarget(self, file: str) -> None:
        """Point the session at another file, dropping the cached result."""
        logger.info("A new file was set: %s", file)
        self._file = file
        self._result = None

    async def fingerprint(self) -> FingerprintResult:
        """Probe and hash the target file, or return the cached result.

        Raises:
            FileNotFoundError: If the file does not exist
            FingerprintError: If probing or hashing fails
        """
        if self._result is not None:
            return self._result

        file = self._file
        logger.info("Fingerprinting file: %s", file)
        if not os.path.exists(file):
            raise FileNotFoundError(f"File not found: {file}")

        probe = await self._probe(file)
        result = FingerprintResult(
            file_identity=get_file_identity(file),
            timestamps=get_file_times(file),
            format=probe.format,
            streams=probe.streams,
            chapters=probe.chapters,
        )

        if self.config.skip_hashing:
            logger.info("Skipping hashing the file.")
        else:
            await self._hash(file, probe, result)

        if self.config.skip_versions:
            logger.info("Skipping tool versions.")
        else:
            result.tool_versions = await self._tool_versions()

        # A retarget while we were running makes this result stale
        if self._file == file:
            self._result = result
        return result

    async def _probe(self, file: str) -> ProbeResult:
        config = self.config
        if config.skip_probing:
            logger.info("Skipping probing the file.")
            return ProbeResult()

        ffprobe = FFprobeProbe(config.tools.ffprobe_path)
        data = await asyncio.to_thread(ffprobe.probe, file, not config.skip_chapters)

        if config.skip_mediainfo:
            logger.info("Skipping probing the file using MediaInfo.")
        else:
            mediainfo = MediaInfoProbe(config.tools.mediainfo_path)
            if mediainfo.is_available():
                enrich_with_mediainfo(data, await asyncio.to_thread(mediainfo.probe, file))
            else:
                logger.warning("MediaInfo not found, skipping enrichment")

        return ProbeResult.from_probe_data(data)

    async def _hash(self, file: str, probe: ProbeResult, result: FingerprintResult) -> None:
        hash_config = self.config.hash
        algorithm = hash_config.algorithm
        result.hash_config = hash_config.to_dict()

        chapter_hashes: list[ChapterHashRecord] = []
        if hash_config.include_chapters and not self.config.skip_chapters:
            chapter_hashes = [hash_chapter(chapter, algorithm) for chapter in probe.chapters]
        format_digest = hash_format(probe.format, algorithm)

        # Property selection and ceilings are resolved before any ffmpeg starts
        tasks = []
        for stream in select_streams(probe.streams, hash_config):
            props = canonical_stream_properties(stream)
            ceiling = hash_config.ceiling_for(stream.codec_type or "")
            tasks.append(functools.partial(self._hash_stream, file, stream, props, ceiling))

        logger.debug("Hashing %d of %d streams", len(tasks), len(probe.streams))
        stream_hashes = await ConcurrentHashScheduler(hash_config.parallel).run(tasks)
        stream_hashes.sort(key=lambda record: record.index)

        combined = combine(format_digest, chapter_hashes, stream_hashes, algorithm)
        result.format_digest = format_digest
        result.chapter_hashes = chapter_hashes
        result.stream_hashes = stream_hashes
        result.composite_digest = combined.composite_digest
        result.provenance = list(combined.provenance)

    async def _hash_stream(
        self,
        file: str,
        stream: MediaStreamDescriptor,
        canonical_props: str,
        ceiling: int | None,
    ) -> StreamHashRecord:
        algorithm = self.config.hash.algorithm
        hasher = BoundedStreamHasher.for_stream(
            stream,
            file,
            ffmpeg_path=self.config.tools.ffmpeg_path,
            ceiling=ceiling,
            algorithm=algorithm,
            mjpeg_workaround=self.config.tools.enable_mjpeg_workaround,
            timeout=self.config.hash.timeout,
        )
        content = await hasher.run()
        return StreamHashRecord(
            index=content.index,
            digest=content.digest,
            digest_with_properties=digest_with_properties(content.digest, canonical_props, algorithm),
            byte_count=content.byte_count,
        )

    async def _tool_versions(self) -> ToolVersions:
        tools = self.config.tools
        mediainfo_path = None if self.config.skip_mediainfo_version else tools.mediainfo_path
        return await asyncio.to_thread(
            get_tool_versions, tools.ffmpeg_path, tools.ffprobe_path, mediainfo_path
        )


def fingerprint_file(path: str, config: FingerprintConfig | None = None) -> FingerprintResult:
    """Fingerprint a media file.

    This is the main synchronous entry point. It:
    1. Probes the file with ffprobe (and MediaInfo, if available)
    2. Hashes the format, chapters and selected streams
    3. Combines all digests into the composite fingerprint
    4. Records file identity, timestamps and tool versions

    Args:
        path: Path to the media file
        config: Configuration to use (default: the global configuration)

    Returns:
        FingerprintResult for the file

    Raises:
        FileNotFoundError: If the file does not exist
        FingerprintError: If probing or hashing fails
    """
    return asyncio.run(Fingerprinter(path, config).fingerprint())


def fingerprint_files(
    paths: list[str], config: FingerprintConfig | None = None
) -> list[FingerprintResult]:
    """Fingerprint multiple media files, skipping (and logging) failures.

    Args:
        paths: List of file paths
        config: Configuration to use

    Returns:
        List of results for the files that could be fingerprinted
    """
    results = []
    for path in paths:
        try:
            results.append(fingerprint_file(path, config))
        except (OSError, FingerprintError) as e:
            logger.warning("Failed to fingerprint %s: %s", path, e)
    return results
