"""File identity and timestamp models."""

from datetime import datetime

from pydantic import BaseModel


def format_size(size_bytes: int | float) -> str:
    """Convert bytes to human-readable string."""
    if size_bytes < 0:
        return "N/A"
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB", "PB"]:
        if size < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} EB"


class FileIdentity(BaseModel):
    """Which file a fingerprint belongs to."""

    path: str
    name: str
    directory: str
    size_bytes: int

    @property
    def size_human(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size_bytes)


class FileTimes(BaseModel):
    """File system timestamps plus the time the fingerprint was taken.

    ``created`` is only available on platforms exposing a birth time.
    """

    hash_time: datetime
    accessed: datetime | None = None
    modified: datetime | None = None
    changed: datetime | None = None
    created: datetime | None = None
