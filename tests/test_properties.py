"""Tests for stream property selection."""

import hashlib

import pytest
from conftest import AUDIO_STREAM, SUBTITLE_STREAM, VIDEO_STREAM

from ffprint.errors import MetadataUnavailable, UnsupportedStreamType
from ffprint.hashing import (
    canonical_stream_properties,
    digest_with_properties,
    select_stream_properties,
)
from ffprint.models import (
    AudioProperties,
    MediaStreamDescriptor,
    SubtitleProperties,
    VideoProperties,
)
from ffprint.probes import normalize


def stream(raw: dict) -> MediaStreamDescriptor:
    return MediaStreamDescriptor.model_validate(normalize(raw))


class TestSelectStreamProperties:
    """Test select_stream_properties()."""

    def test_audio(self):
        """Test the audio property subset."""
        props = select_stream_properties(stream(AUDIO_STREAM))
        assert isinstance(props, AudioProperties)
        assert props.model_dump() == {
            "codec_name": "aac",
            "codec_time_base": None,
            "profile": "LC",
            "sample_fmt": "fltp",
            "sample_rate": 48000,
            "channels": 2,
            "channel_layout": "stereo",
            "bit_rate": 128000,
        }

    def test_audio_defaults(self):
        """Test that missing profile and bit rate get their defaults."""
        raw = {k: v for k, v in AUDIO_STREAM.items() if k not in ("profile", "bit_rate")}
        props = select_stream_properties(stream(raw))
        assert props.profile == ""
        assert props.bit_rate == 0

    def test_audio_empty_values_defaulted(self):
        """Test that empty profile and zero bit rate count as unknown."""
        props = select_stream_properties(stream({**AUDIO_STREAM, "profile": "", "bit_rate": "0"}))
        assert props.profile == ""
        assert props.bit_rate == 0

    def test_surround_channel_layout(self):
        """Test that number-like channel layouts are kept."""
        props = select_stream_properties(stream({**AUDIO_STREAM, "channels": 6, "channel_layout": "5.1"}))
        assert props.channel_layout == 5.1
        assert "channel_layout:5.1," in canonical_stream_properties(
            stream({**AUDIO_STREAM, "channels": 6, "channel_layout": "5.1"})
        )

    def test_number_like_text_fields(self):
        """Test that other free-text fields also accept numbers."""
        props = select_stream_properties(
            stream({**VIDEO_STREAM, "pix_fmt": "0", "r_frame_rate": "25"})
        )
        assert props.pix_fmt == 0
        assert props.r_frame_rate == 25

    def test_video(self):
        """Test the video property subset."""
        props = select_stream_properties(stream(VIDEO_STREAM))
        assert isinstance(props, VideoProperties)
        assert props.coded_height == 1088
        assert props.r_frame_rate == "24000/1001"
        assert "tags" not in props.model_dump()
        assert "disposition" not in props.model_dump()

    def test_video_defaults(self):
        """Test coded size and aspect ratio defaults."""
        raw = {
            k: v
            for k, v in VIDEO_STREAM.items()
            if k not in ("coded_width", "coded_height", "sample_aspect_ratio", "display_aspect_ratio", "profile")
        }
        props = select_stream_properties(stream(raw))
        assert props.coded_width == 1920
        assert props.coded_height == 1080
        assert props.sample_aspect_ratio == 1
        assert props.display_aspect_ratio == 1
        assert props.profile == ""

    def test_video_zero_aspect_defaulted(self):
        """Test that zero aspect ratios and an empty profile count as unknown."""
        props = select_stream_properties(
            stream({**VIDEO_STREAM, "sample_aspect_ratio": 0, "display_aspect_ratio": "", "profile": ""})
        )
        assert props.sample_aspect_ratio == 1
        assert props.display_aspect_ratio == 1
        assert props.profile == ""

    def test_video_zero_coded_size_falls_back(self):
        """Test that a coded size of 0 means unknown."""
        props = select_stream_properties(stream({**VIDEO_STREAM, "coded_width": 0, "coded_height": 0}))
        assert (props.coded_width, props.coded_height) == (1920, 1080)

    def test_subtitle(self):
        """Test the subtitle property subset includes disposition."""
        props = select_stream_properties(stream(SUBTITLE_STREAM))
        assert isinstance(props, SubtitleProperties)
        assert props.disposition == {"default": 0, "forced": 1}

    def test_unsupported_type(self):
        """Test that data streams are rejected."""
        data_stream = stream({"index": 3, "codec_type": "data", "codec_name": "bin_data"})
        with pytest.raises(UnsupportedStreamType) as exc_info:
            select_stream_properties(data_stream)
        assert exc_info.value.codec_type == "data"
        assert exc_info.value.index == 3

    def test_missing_codec_type(self):
        """Test that codec_type is never inferred."""
        with pytest.raises(MetadataUnavailable):
            select_stream_properties(stream({"index": 0, "codec_name": "h264", "width": 1, "height": 1}))

    def test_missing_mandatory_field(self):
        """Test that a video stream without dimensions is rejected."""
        raw = {k: v for k, v in VIDEO_STREAM.items() if k != "width"}
        with pytest.raises(MetadataUnavailable):
            select_stream_properties(stream(raw))


class TestCanonicalStreamProperties:
    """Test canonical_stream_properties() and digest_with_properties()."""

    def test_container_fields_ignored(self):
        """Test that container-specific fields do not affect the properties."""
        remuxed = {
            **VIDEO_STREAM,
            "time_base": "1/90000",
            "start_pts": 1001,
            "id": "0x1",
            "tags": {"handler_name": "VideoHandler"},
        }
        assert canonical_stream_properties(stream(VIDEO_STREAM)) == canonical_stream_properties(
            stream(remuxed)
        )

    def test_property_change_detected(self):
        """Test that a relevant property change alters the properties."""
        changed = {**AUDIO_STREAM, "channels": 6, "channel_layout": "5.1"}
        assert canonical_stream_properties(stream(AUDIO_STREAM)) != canonical_stream_properties(
            stream(changed)
        )

    def test_digest_with_properties(self):
        """Test that the content digest and properties are joined with a colon."""
        raw = "ab" * 32
        props = canonical_stream_properties(stream(SUBTITLE_STREAM))
        expected = hashlib.sha256(f"{raw}:{props}".encode()).hexdigest()
        assert digest_with_properties(raw, props) == expected
        assert digest_with_properties(raw, props, "md5") == hashlib.md5(
            f"{raw}:{props}".encode()
        ).hexdigest()
