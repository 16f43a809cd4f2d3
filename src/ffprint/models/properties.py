"""Codec-type specific stream properties folded into stream digests.

Each variant has a fixed field set that is validated when it is built from a
stream descriptor. Fields that ffprobe may legitimately omit are nullable;
the rest are mandatory.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

Scalar = str | int | float | bool


class StreamProperties(BaseModel):
    """Common base of the property variants."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    codec_type: ClassVar[str] = ""

    codec_name: str
    codec_time_base: Scalar | None = None


class AudioProperties(StreamProperties):
    """Properties selected for audio streams."""

    codec_type: ClassVar[str] = "audio"

    profile: Scalar = ""
    sample_fmt: Scalar | None = None
    sample_rate: int
    channels: int
    channel_layout: Scalar | None = None
    bit_rate: Scalar = 0

    # Empty and zero values count as unknown, like missing ones
    @field_validator("profile", mode="before")
    @classmethod
    def _default_profile(cls, value: Any) -> Any:
        return value or ""

    @field_validator("bit_rate", mode="before")
    @classmethod
    def _default_bit_rate(cls, value: Any) -> Any:
        return value or 0


class VideoProperties(StreamProperties):
    """Properties selected for video streams (including still images)."""

    codec_type: ClassVar[str] = "video"

    profile: Scalar = ""
    width: int
    height: int
    coded_width: int
    coded_height: int
    has_b_frames: int | None = None
    pix_fmt: Scalar | None = None
    sample_aspect_ratio: Scalar = 1
    display_aspect_ratio: Scalar = 1
    r_frame_rate: Scalar | None = None

    @model_validator(mode="before")
    @classmethod
    def _coded_size_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            # 0 means "unknown" in ffprobe output
            if not data.get("coded_width"):
                data["coded_width"] = data.get("width")
            if not data.get("coded_height"):
                data["coded_height"] = data.get("height")
        return data

    @field_validator("profile", mode="before")
    @classmethod
    def _default_profile(cls, value: Any) -> Any:
        return value or ""

    @field_validator("sample_aspect_ratio", "display_aspect_ratio", mode="before")
    @classmethod
    def _default_aspect(cls, value: Any) -> Any:
        return value or 1


class SubtitleProperties(StreamProperties):
    """Properties selected for subtitle streams."""

    codec_type: ClassVar[str] = "subtitle"

    disposition: dict[str, Any] = {}


PROPERTY_VARIANTS: dict[str, type[StreamProperties]] = {
    variant.codec_type: variant
    for variant in (AudioProperties, VideoProperties, SubtitleProperties)
}
