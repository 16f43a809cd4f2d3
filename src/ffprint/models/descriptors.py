"""Probe descriptor models for formats, streams and chapters."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ffprint.errors import MetadataUnavailable

# Container-level metadata is hashed as a whole, so it stays a plain mapping.
FormatDescriptor = dict[str, Any]


class MediaStreamDescriptor(BaseModel):
    """One stream as reported by ffprobe.

    Only the fields the engine relies on are declared; every other ffprobe
    field is kept as an extra and can be read with :meth:`get`.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    index: int = Field(ge=0)
    codec_type: str | None = None
    codec_name: str | None = None
    tags: dict[str, Any] = Field(default_factory=dict)
    disposition: dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", "disposition", mode="before")
    @classmethod
    def _empty_mapping(cls, value: Any) -> Any:
        return {} if value is None else value

    def get(self, name: str, default: Any = None) -> Any:
        """Return a declared or extra field, or ``default`` if absent."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)

    @property
    def label(self) -> str:
        """Short human-readable identifier, e.g. ``#1 (audio)``."""
        return f"#{self.index} ({self.codec_type or 'unknown'})"


class ChapterDescriptor(BaseModel):
    """One chapter as reported by ffprobe (time base, start/end, tags)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str
    tags: dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", mode="before")
    @classmethod
    def _empty_tags(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_mapping(self) -> dict[str, Any]:
        """Return all chapter fields, including extras, as a plain dict."""
        return self.model_dump()


class ProbeResult(BaseModel):
    """Descriptors produced by a single probing pass over a file."""

    model_config = ConfigDict(frozen=True)

    format: FormatDescriptor = Field(default_factory=dict)
    streams: list[MediaStreamDescriptor] = Field(default_factory=list)
    chapters: list[ChapterDescriptor] = Field(default_factory=list)

    @classmethod
    def from_probe_data(cls, data: dict[str, Any]) -> "ProbeResult":
        """Build descriptors from normalized probe output.

        Missing or malformed stream/chapter lists degrade to empty lists.

        Raises:
            MetadataUnavailable: If a stream lacks a valid index or a chapter
                lacks its id
        """
        fmt = data.get("format")
        streams = data.get("streams")
        chapters = data.get("chapters")
        try:
            return cls(
                format=fmt if isinstance(fmt, dict) else {},
                streams=streams if isinstance(streams, list) else [],
                chapters=chapters if isinstance(chapters, list) else [],
            )
        except ValidationError as e:
            raise MetadataUnavailable(f"Probe output is missing required fields: {e}") from e
