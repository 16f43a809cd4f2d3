"""Dependency checking utilities."""

import shutil

from ffprint.config import FingerprintConfig, get_config


def check_system_dependencies(config: FingerprintConfig | None = None) -> dict[str, bool]:
    """Check availability of the external tools.

    Returns:
        Dict mapping tool names to availability status.
    """
    tools = (config or get_config()).tools
    paths = {
        "ffmpeg": tools.ffmpeg_path,
        "ffprobe": tools.ffprobe_path,
        "mediainfo": tools.mediainfo_path,
    }
    return {name: shutil.which(path) is not None for name, path in paths.items()}


def print_dependency_status(config: FingerprintConfig | None = None) -> None:
    """Print dependency status to stdout."""
    status = check_system_dependencies(config)

    print("ffprint dependency status:")
    print("=" * 40)

    for name, available in sorted(status.items()):
        icon = "✓" if available else "✗"
        print(f"  {icon} {name}")

    # Recommendations
    if not (status["ffmpeg"] and status["ffprobe"]):
        print("\n⚠️  ffmpeg and ffprobe are required. Install: brew install ffmpeg")
    if not status["mediainfo"]:
        print("\n💡 For MediaInfo enrichment: brew install mediainfo (or use --skip-mediainfo)")
