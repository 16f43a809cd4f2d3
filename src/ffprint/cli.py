"""
Command-line interface for ffprint.

Usage:
  ffprint video.mkv                        # JSON report
  ffprint --only-hash *.mkv                # Fingerprints only
  ffprint --summary video.mkv              # Human-readable summary
  ffprint -o report.json *.mkv             # Save JSON report
  ffprint --types video video.mkv          # Hash video streams only
  ffprint --status                         # Check external tools
"""

from __future__ import annotations

import argparse
import logging
import sys

from ffprint._version import __version__
from ffprint.config import MODE_BOUNDED, MODE_EXHAUSTIVE, STREAM_TYPES, FingerprintConfig, load_config
from ffprint.errors import ConfigError, FingerprintError
from ffprint.fingerprint import fingerprint_file
from ffprint.formatters import format_hash, format_json, format_json_list, format_summary
from ffprint.utils import print_dependency_status


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ffprint",
        description="Reproducible content fingerprints for media files using FFmpeg.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output:
  (default)     Full JSON report (probe data, per-entity hashes, fingerprint)
  --only-hash   Only the composite fingerprint
  --summary     Human-readable summary

Hashing:
  In bounded mode only the first N bytes of each stream are hashed
  (audio 10 MB, video 80 MB, subtitle 5 KB by default); exhaustive mode
  hashes whole streams.

Examples:
  ffprint video.mkv                        # JSON report
  ffprint --only-hash *.mkv                # Fingerprints only
  ffprint --mode exhaustive video.mkv      # Hash complete streams
  ffprint --ids 0 1 video.mkv              # Hash streams #0 and #1 only
  ffprint -c ffprint.yaml video.mkv        # Use a config file
        """,
    )
    parser.add_argument("files", nargs="*", help="Media file(s) to fingerprint")
    parser.add_argument("-o", "--output", help="Save report to JSON file")
    parser.add_argument("-c", "--config", help="YAML config file (default: ~/.ffprint/config.yaml)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    # Output selection (mutually exclusive)
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--only-hash", action="store_true", help="Print only the composite fingerprint"
    )
    output_group.add_argument("--summary", action="store_true", help="Print a readable summary")
    output_group.add_argument(
        "--status", action="store_true", help="Show external tool availability"
    )
    parser.add_argument("--compact", action="store_true", help="Do not indent JSON output")
    parser.add_argument(
        "--no-probe-data",
        action="store_true",
        help="Leave format, stream and chapter data out of the JSON report",
    )

    # Tools
    parser.add_argument("-m", "--ffmpeg", metavar="PATH", help="Path to ffmpeg")
    parser.add_argument("-p", "--ffprobe", metavar="PATH", help="Path to ffprobe")
    parser.add_argument("--mediainfo", metavar="PATH", help="Path to mediainfo")

    # Hashing
    parser.add_argument(
        "--mode",
        choices=[MODE_BOUNDED, MODE_EXHAUSTIVE, "fast", "complete"],
        help="Hash the first bytes of each stream (bounded) or everything (exhaustive)",
    )
    parser.add_argument("--algorithm", help="hashlib algorithm name (default: sha256)")
    parser.add_argument(
        "--types", nargs="+", choices=STREAM_TYPES, help="Stream types to hash"
    )
    parser.add_argument(
        "--ids", nargs="+", type=int, metavar="INDEX", help="Stream indexes to hash (overrides --types)"
    )
    parser.add_argument("--parallel", type=int, metavar="N", help="Streams hashed in parallel")
    parser.add_argument(
        "--timeout", type=float, metavar="SECONDS", help="Per-stream extraction timeout"
    )

    # Skipping steps
    parser.add_argument("--skip-probe", action="store_true", help="Do not probe the file")
    parser.add_argument("--skip-hash", action="store_true", help="Only probe, do not hash")
    parser.add_argument(
        "--skip-chapters", action="store_true", help="Do not probe or hash chapters"
    )
    parser.add_argument(
        "--skip-mediainfo", action="store_true", help="Do not enrich probe data with MediaInfo"
    )
    parser.add_argument(
        "--skip-versions", action="store_true", help="Do not record tool versions"
    )
    parser.add_argument(
        "--skip-miversion", action="store_true", help="Do not record the MediaInfo version"
    )

    # Logging
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Suppress all log output")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr at the requested verbosity."""
    if quiet:
        level = logging.CRITICAL + 1
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def apply_overrides(config: FingerprintConfig, args: argparse.Namespace) -> FingerprintConfig:
    """Apply command line options on top of the loaded configuration.

    Raises:
        ConfigError: If the resulting hash configuration is invalid
    """
    if args.ffmpeg:
        config.tools.ffmpeg_path = args.ffmpeg
    if args.ffprobe:
        config.tools.ffprobe_path = args.ffprobe
    if args.mediainfo:
        config.tools.mediainfo_path = args.mediainfo

    hash_config = config.hash
    if args.mode:
        hash_config.mode = args.mode
    if args.algorithm:
        hash_config.algorithm = args.algorithm
    if args.types:
        hash_config.stream_types = list(args.types)
    if args.ids:
        hash_config.stream_ids = list(args.ids)
    if args.parallel is not None:
        hash_config.parallel = args.parallel
    if args.timeout is not None:
        hash_config.timeout = args.timeout

    config.skip_probing = config.skip_probing or args.skip_probe
    config.skip_hashing = config.skip_hashing or args.skip_hash
    config.skip_chapters = config.skip_chapters or args.skip_chapters
    config.skip_mediainfo = config.skip_mediainfo or args.skip_mediainfo
    config.skip_versions = config.skip_versions or args.skip_versions
    config.skip_mediainfo_version = config.skip_mediainfo_version or args.skip_miversion
    if config.skip_chapters:
        hash_config.include_chapters = False

    hash_config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point for ffprint CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Handle --status mode (no files required)
    if args.status:
        print_dependency_status(config)
        return 0

    if not args.files:
        parser.error("the following arguments are required: files")

    results = []
    errors = 0
    indent = None if args.compact else 2
    include_probe = not args.no_probe_data

    for file_path in args.files:
        try:
            result = fingerprint_file(file_path, config)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1
            continue
        except FingerprintError as e:
            print(f"Error fingerprinting {file_path}: {e}", file=sys.stderr)
            errors += 1
            continue

        results.append(result)
        if args.only_hash:
            print(format_hash(result))
        elif args.summary:
            print(format_summary(result))
            print()
        elif not args.output:
            print(format_json(result, indent=indent, include_probe=include_probe))

    # JSON export
    if args.output and results:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(format_json_list(results, indent=indent, include_probe=include_probe))
        print(f"Report saved to: {args.output}", file=sys.stderr)

    return 1 if errors > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
