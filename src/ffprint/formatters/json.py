"""JSON report formatter.

A report holds the file identity, the digests and the settings they were
computed with. The probed format, stream and chapter descriptors make up most
of its size and can be left out when only the fingerprint matters.
"""

import json
from typing import Any

from ffprint.models import FingerprintResult

PROBE_FIELDS = {"format", "streams", "chapters"}


def to_dict(result: FingerprintResult, include_probe: bool = True) -> dict[str, Any]:
    """Return the JSON-compatible report of a fingerprint result.

    Args:
        result: FingerprintResult object
        include_probe: Keep the probed format, stream and chapter data
    """
    return result.model_dump(mode="json", exclude=None if include_probe else PROBE_FIELDS)


def format_json(
    result: FingerprintResult, indent: int | None = 2, include_probe: bool = True
) -> str:
    """Format one report as JSON (``indent=None`` for a single line)."""
    return json.dumps(to_dict(result, include_probe), indent=indent, ensure_ascii=False)


def format_json_list(
    results: list[FingerprintResult], indent: int | None = 2, include_probe: bool = True
) -> str:
    """Format several reports as one JSON array, in the given order."""
    reports = [to_dict(result, include_probe) for result in results]
    return json.dumps(reports, indent=indent, ensure_ascii=False)
