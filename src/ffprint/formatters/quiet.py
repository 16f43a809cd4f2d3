"""Hash-only output formatter."""

from ffprint.models import FingerprintResult


def format_hash(result: FingerprintResult) -> str:
    """Return just the composite digest ("-" if hashing was skipped)."""
    return result.composite_digest or "-"


def format_hash_list(results: list[FingerprintResult]) -> str:
    """Format multiple results as ``digest  path`` lines, like sha256sum.

    Args:
        results: List of FingerprintResult objects

    Returns:
        Multiple lines, one per file
    """
    return "\n".join(f"{format_hash(r)}  {r.file_identity.path}" for r in results)
