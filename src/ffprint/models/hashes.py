"""Hash records produced by a fingerprint run."""

from pydantic import BaseModel, ConfigDict


class StreamContentDigest(BaseModel):
    """Digest over the leading bytes of one elementary stream."""

    model_config = ConfigDict(frozen=True)

    index: int
    digest: str
    byte_count: int


class StreamHashRecord(BaseModel):
    """Content digest of a stream plus its digest combined with properties."""

    model_config = ConfigDict(frozen=True)

    index: int
    digest: str
    digest_with_properties: str
    byte_count: int


class ChapterHashRecord(BaseModel):
    """Digest over the canonical form of one chapter."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    digest: str


class CombinedFingerprint(BaseModel):
    """Composite digest and the ordered ids of the digests folded into it."""

    model_config = ConfigDict(frozen=True)

    composite_digest: str
    provenance: tuple[str, ...]
