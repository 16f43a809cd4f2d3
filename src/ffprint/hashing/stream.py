"""Bounded-byte hashing of one elementary stream extracted by ffmpeg.

ffmpeg copies the selected stream (no re-encoding) to stdout. The output is
folded into a digest chunk by chunk until the byte ceiling is reached; the
chunk crossing the ceiling only contributes the bytes needed to reach it
exactly. ffmpeg is then asked to quit by sending ``q`` on stdin, and its
remaining output is drained and discarded until it exits.

Some MJPEG inputs make ffmpeg keep reading long after the ceiling was hit.
For those the process is killed instead, and the kill counts as success.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from ffprint.errors import ExtractionFailed, TimedOut
from ffprint.hashing.digest import DEFAULT_ALGORITHM, new_hash
from ffprint.models import MediaStreamDescriptor, StreamContentDigest

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# Codecs for which reaching the ceiling kills ffmpeg when the workaround is on
KILL_ON_BUDGET_CODECS = frozenset({"mjpeg"})


class HashState(str, Enum):
    """Lifecycle of a stream hashing task."""

    PENDING = "pending"
    RUNNING = "running"
    BUDGET_GRACEFUL_STOP = "budget_graceful_stop"
    BUDGET_FORCED_KILL = "budget_forced_kill"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def build_extract_command(ffmpeg_path: str, file: str, index: int) -> list[str]:
    """Return the ffmpeg command copying stream ``index`` of ``file`` to stdout."""
    return [
        ffmpeg_path,
        "-v",
        "quiet",
        "-hide_banner",
        "-i",
        file,
        "-map",
        f"0:{index}",
        "-f",
        "data",
        "-c",
        "copy",
        "-",
    ]


class BoundedStreamHasher:
    """Hash the leading bytes of one stream from a live extraction process.

    Attributes:
        state: Current :class:`HashState`
        byte_count: Bytes folded into the digest so far
    """

    def __init__(
        self,
        command: Sequence[str],
        index: int,
        ceiling: int | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
        kill_on_budget: bool = False,
        timeout: float | None = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.command = list(command)
        self.index = index
        self.ceiling = ceiling
        self.algorithm = algorithm
        self.kill_on_budget = kill_on_budget
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.state = HashState.PENDING
        self.byte_count = 0

    @classmethod
    def for_stream(
        cls,
        stream: MediaStreamDescriptor,
        file: str,
        ffmpeg_path: str = "ffmpeg",
        ceiling: int | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
        mjpeg_workaround: bool = False,
        timeout: float | None = None,
    ) -> BoundedStreamHasher:
        """Create a hasher extracting ``stream`` from ``file`` with ffmpeg."""
        return cls(
            build_extract_command(ffmpeg_path, file, stream.index),
            stream.index,
            ceiling=ceiling,
            algorithm=algorithm,
            kill_on_budget=mjpeg_workaround and stream.codec_name in KILL_ON_BUDGET_CODECS,
            timeout=timeout,
        )

    async def run(self) -> StreamContentDigest:
        """Extract and hash the stream.

        Returns:
            The stream's content digest and the number of bytes hashed

        Raises:
            ExtractionFailed: If the process cannot be launched or fails
            TimedOut: If a timeout is set and the process outlives it
        """
        if self.timeout is None:
            return await self._run()
        try:
            return await asyncio.wait_for(self._run(), self.timeout)
        except asyncio.TimeoutError:
            self.state = HashState.FAILED
            raise TimedOut(self.index, self.timeout) from None

    async def _run(self) -> StreamContentDigest:
        hasher = new_hash(self.algorithm)
        self.state = HashState.RUNNING
        self.byte_count = 0
        logger.debug(
            "Hashing up to %s bytes of stream #%d",
            self.ceiling if self.ceiling is not None else "all",
            self.index,
        )

        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            self.state = HashState.FAILED
            logger.error("Hashing stream #%d failed: cannot launch %s", self.index, self.command[0])
            raise ExtractionFailed(self.index, reason=f"cannot launch {self.command[0]}: {e}") from e

        try:
            await self._consume(proc, hasher)
            returncode = await proc.wait()
        finally:
            # The process never outlives this task, even when it is cancelled
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
            if proc.stdin is not None:
                proc.stdin.close()

        if returncode == 0 or self.state is HashState.BUDGET_FORCED_KILL:
            self.state = HashState.SUCCEEDED
            logger.debug("Hashed %d bytes of stream #%d", self.byte_count, self.index)
            return StreamContentDigest(
                index=self.index,
                digest=hasher.hexdigest().lower(),
                byte_count=self.byte_count,
            )

        self.state = HashState.FAILED
        logger.error("Hashing stream #%d failed with exit status %d", self.index, returncode)
        if returncode < 0:
            raise ExtractionFailed(self.index, signal=-returncode)
        raise ExtractionFailed(self.index, exit_code=returncode)

    async def _consume(self, proc: asyncio.subprocess.Process, hasher: Any) -> None:
        assert proc.stdout is not None
        while True:
            chunk = await proc.stdout.read(self.chunk_size)
            if not chunk:
                return
            if self.state is not HashState.RUNNING:
                # Past the ceiling: drain so ffmpeg never blocks on a full pipe
                continue
            self._fold(chunk, hasher)
            if self.ceiling is not None and self.byte_count >= self.ceiling:
                await self._stop(proc)

    def _fold(self, chunk: bytes, hasher: Any) -> None:
        if self.ceiling is None:
            part = chunk
        else:
            part = chunk[: self.ceiling - self.byte_count]
        hasher.update(part)
        self.byte_count += len(part)

    async def _stop(self, proc: asyncio.subprocess.Process) -> None:
        if self.kill_on_budget:
            self.state = HashState.BUDGET_FORCED_KILL
            logger.debug("Byte ceiling reached for stream #%d, killing ffmpeg", self.index)
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            return

        self.state = HashState.BUDGET_GRACEFUL_STOP
        logger.debug("Byte ceiling reached for stream #%d, asking ffmpeg to quit", self.index)
        if proc.stdin is not None:
            # ffmpeg may already be gone if the stream ended right at the ceiling
            with contextlib.suppress(BrokenPipeError, ConnectionResetError):
                proc.stdin.write(b"q")
                await proc.stdin.drain()
