"""Pytest configuration and fixtures."""

import json
import stat
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from ffprint.config import FingerprintConfig, HashConfig, ToolsConfig

# Stands in for both ffmpeg and ffprobe. Stream N of FILE is read from the
# sidecar FILE.N, probe output from FILE.probe.json.
FAKE_TOOL = """#!{python}
import sys

args = sys.argv[1:]
if args == ["-version"]:
    print("fake version 1.0 Copyright (c) the fakers")
    print("configuration: --enable-fake")
    sys.exit(0)
if "-map" in args:
    path = args[args.index("-i") + 1]
    index = args[args.index("-map") + 1].split(":")[1]
    try:
        with open(path + "." + index, "rb") as f:
            data = f.read()
    except OSError:
        sys.exit(1)
    out = sys.stdout.buffer
    for start in range(0, len(data), 4096):
        out.write(data[start:start + 4096])
    out.flush()
    sys.exit(0)
with open(args[-1] + ".probe.json") as f:
    sys.stdout.write(f.read())
"""

# Writes the bytes of argv[1] to stdout, then behaves as argv[2] says:
# exitN (exit with code N), wait-q (exit 0 after a byte on stdin),
# hang (sleep), signal (terminate itself with SIGTERM).
EMITTER = """
import os, signal, sys, time

with open(sys.argv[1], "rb") as f:
    data = f.read()
out = sys.stdout.buffer
for start in range(0, len(data), 4096):
    out.write(data[start:start + 4096])
    out.flush()
mode = sys.argv[2]
if mode == "wait-q":
    sys.stdin.read(1)
elif mode == "hang":
    time.sleep(60)
elif mode == "signal":
    os.kill(os.getpid(), signal.SIGTERM)
    time.sleep(60)
else:
    sys.exit(int(mode[4:]))
"""


def command_exists(cmd: str) -> bool:
    """Check if a command exists in PATH."""
    try:
        subprocess.run(
            [cmd, "-version"],
            capture_output=True,
            timeout=5,
        )
        return True
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False


def sample_bytes(size: int, seed: int = 0) -> bytes:
    """Deterministic, non-repeating-looking test payload."""
    return bytes((i * 31 + seed) % 251 for i in range(size))


@pytest.fixture
def has_ffmpeg() -> bool:
    """Check if ffmpeg and ffprobe are available."""
    return command_exists("ffmpeg") and command_exists("ffprobe")


@pytest.fixture
def emitter(tmp_path: Path) -> Callable[[bytes, str], list[str]]:
    """Build a command that emits ``data`` and then acts according to ``mode``."""
    counter = iter(range(1_000_000))

    def build(data: bytes, mode: str = "exit0") -> list[str]:
        payload = tmp_path / f"payload-{next(counter)}.bin"
        payload.write_bytes(data)
        return [sys.executable, "-c", EMITTER, str(payload), mode]

    return build


@pytest.fixture
def fake_tool(tmp_path: Path) -> str:
    """Path of an executable impersonating ffmpeg/ffprobe."""
    if sys.platform == "win32":
        pytest.skip("fake tools need a POSIX shebang")
    tool = tmp_path / "fake-ff"
    tool.write_text(FAKE_TOOL.format(python=sys.executable))
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(tool)


@pytest.fixture
def fake_config(fake_tool: str) -> Callable[..., FingerprintConfig]:
    """Build a FingerprintConfig that uses the fake tools."""

    def build(**hash_options: Any) -> FingerprintConfig:
        return FingerprintConfig(
            tools=ToolsConfig(ffmpeg_path=fake_tool, ffprobe_path=fake_tool),
            hash=HashConfig(**hash_options).validate(),
            skip_mediainfo=True,
            skip_versions=True,
        )

    return build


@pytest.fixture
def make_media(tmp_path: Path) -> Callable[..., str]:
    """Create a fake media file with per-stream payloads and probe output."""

    def build(
        name: str,
        streams: list[dict[str, Any]],
        payloads: dict[int, bytes],
        fmt: dict[str, Any] | None = None,
        chapters: list[dict[str, Any]] | None = None,
    ) -> str:
        path = tmp_path / name
        path.write_bytes(b"\x1a\x45\xdf\xa3" + name.encode())
        for index, data in payloads.items():
            (tmp_path / f"{name}.{index}").write_bytes(data)
        probe: dict[str, Any] = {
            "format": fmt if fmt is not None else {"filename": str(path), "format_name": "matroska,webm"},
            "streams": streams,
        }
        if chapters is not None:
            probe["chapters"] = chapters
        (tmp_path / f"{name}.probe.json").write_text(json.dumps(probe))
        return str(path)

    return build


# ffprobe-style stream entries; values are strings where ffprobe uses strings

VIDEO_STREAM: dict[str, Any] = {
    "index": 0,
    "codec_name": "h264",
    "codec_type": "video",
    "profile": "High",
    "width": 1920,
    "height": 1080,
    "coded_width": 1920,
    "coded_height": 1088,
    "has_b_frames": 2,
    "pix_fmt": "yuv420p",
    "sample_aspect_ratio": "1:1",
    "display_aspect_ratio": "16:9",
    "r_frame_rate": "24000/1001",
    "time_base": "1/1000",
    "disposition": {"default": 1, "forced": 0},
    "tags": {"language": "eng"},
}

AUDIO_STREAM: dict[str, Any] = {
    "index": 1,
    "codec_name": "aac",
    "codec_type": "audio",
    "profile": "LC",
    "sample_fmt": "fltp",
    "sample_rate": "48000",
    "channels": 2,
    "channel_layout": "stereo",
    "bit_rate": "128000",
    "time_base": "1/1000",
    "disposition": {"default": 1},
}

SUBTITLE_STREAM: dict[str, Any] = {
    "index": 2,
    "codec_name": "subrip",
    "codec_type": "subtitle",
    "disposition": {"default": 0, "forced": 1},
    "tags": {"language": "ger"},
}
