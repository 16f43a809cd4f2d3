"""Codec-type specific property selection for stream digests."""

from __future__ import annotations

from pydantic import ValidationError

from ffprint.errors import MetadataUnavailable, UnsupportedStreamType
from ffprint.hashing.canonical import canonicalize
from ffprint.hashing.digest import DEFAULT_ALGORITHM, hex_digest
from ffprint.models import PROPERTY_VARIANTS, MediaStreamDescriptor, StreamProperties


def select_stream_properties(stream: MediaStreamDescriptor) -> StreamProperties:
    """Pick the fixed property subset for the stream's codec type.

    Raises:
        UnsupportedStreamType: If the codec type is not audio, video or subtitle
        MetadataUnavailable: If the codec type or a mandatory property is missing
    """
    if stream.codec_type is None:
        raise MetadataUnavailable(f"Stream #{stream.index} has no codec_type")

    variant = PROPERTY_VARIANTS.get(stream.codec_type)
    if variant is None:
        raise UnsupportedStreamType(stream.codec_type, stream.index)

    try:
        return variant.model_validate(stream.model_dump())
    except ValidationError as e:
        missing = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MetadataUnavailable(
            f"Stream {stream.label} lacks usable {stream.codec_type} properties: {missing}"
        ) from e


def canonical_stream_properties(stream: MediaStreamDescriptor) -> str:
    """Return the canonical string of the stream's selected properties."""
    return canonicalize(select_stream_properties(stream).model_dump())


def digest_with_properties(
    raw_digest: str, canonical_props: str, algorithm: str = DEFAULT_ALGORITHM
) -> str:
    """Combine a stream's content digest with its canonical properties."""
    return hex_digest(f"{raw_digest}:{canonical_props}", algorithm)
