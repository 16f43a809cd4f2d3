"""Default output formatter - human-readable fingerprint summary."""

from ffprint.models import FingerprintResult


def format_summary(result: FingerprintResult) -> str:
    """Format a fingerprint result as a readable report.

    Shows the file, the composite fingerprint with its provenance, and the
    per-stream and per-chapter digests.
    """
    lines = []
    identity = result.file_identity

    lines.append("=" * 70)
    lines.append(f"File: {identity.name}")
    lines.append("=" * 70)
    lines.append(f"  Path:         {identity.path}")
    lines.append(f"  Size:         {identity.size_human}")
    lines.append(f"  Hashed at:    {result.timestamps.hash_time.strftime('%Y-%m-%d %H:%M:%S UTC')}")

    if result.composite_digest is None:
        lines.append("")
        lines.append("  (hashing skipped)")
        return "\n".join(lines)

    lines.append("")
    lines.append("## FINGERPRINT")
    lines.append(f"  {result.composite_digest}")
    if result.hash_config:
        lines.append(
            f"  Algorithm:    {result.hash_config.get('algorithm')}"
            f" ({result.hash_config.get('mode')})"
        )
    lines.append(f"  Based on:     {', '.join(result.provenance)}")

    if result.stream_hashes:
        types = {stream.index: stream.codec_type or "unknown" for stream in result.streams}
        lines.append("")
        lines.append("## STREAMS")
        for record in result.stream_hashes:
            codec_type = types.get(record.index, "unknown")
            lines.append(f"  #{record.index} {codec_type:<9} {record.digest}")
            lines.append(f"  {'':<12}with properties: {record.digest_with_properties}")
            lines.append(f"  {'':<12}bytes hashed:    {record.byte_count:,}")

    if result.chapter_hashes:
        lines.append("")
        lines.append("## CHAPTERS")
        for chapter in result.chapter_hashes:
            lines.append(f"  {str(chapter.id):<12}{chapter.digest}")

    lines.append("")
    lines.append("## FORMAT")
    lines.append(f"  {result.format_digest}")

    versions = result.tool_versions
    if versions is not None:
        lines.append("")
        lines.append("## TOOLS")
        lines.append(f"  ffprint:      {versions.ffprint}")
        for name in ("ffmpeg", "ffprobe", "mediainfo"):
            value = getattr(versions, name)
            if value:
                lines.append(f"  {name + ':':<14}{value.split(';')[0]}")

    return "\n".join(lines)
