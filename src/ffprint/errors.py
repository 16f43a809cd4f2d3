"""Exceptions raised while fingerprinting."""

from __future__ import annotations


class FingerprintError(Exception):
    """Base class for all fingerprinting errors."""

    pass


class ConfigError(FingerprintError):
    """Invalid fingerprinting configuration."""

    pass


class UnsupportedValue(FingerprintError):
    """A value that has no canonical form reached the serializer."""

    pass


class UnsupportedStreamType(FingerprintError):
    """Property selection was requested for an unsupported codec type."""

    def __init__(self, codec_type: str, index: int | None = None) -> None:
        self.codec_type = codec_type
        self.index = index
        where = f" (stream #{index})" if index is not None else ""
        super().__init__(f"Streams of type {codec_type!r} are not supported{where}")


class MetadataUnavailable(FingerprintError):
    """Probe output lacks fields required by a descriptor selected for hashing."""

    pass


class ProbeFailed(FingerprintError):
    """A probing tool failed or returned output that could not be parsed."""

    pass


class ExtractionFailed(FingerprintError):
    """The stream extraction process failed to launch or exited unsuccessfully.

    Attributes:
        index: Index of the stream that was being extracted
        exit_code: Process exit code, if it exited on its own
        signal: Signal number, if the process was killed by a signal
    """

    def __init__(
        self,
        index: int,
        exit_code: int | None = None,
        signal: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.index = index
        self.exit_code = exit_code
        self.signal = signal
        if reason:
            detail = reason
        elif signal is not None:
            detail = f"killed by signal {signal}"
        else:
            detail = f"exit code {exit_code}"
        super().__init__(f"Extracting stream #{index} failed: {detail}")


class TimedOut(FingerprintError):
    """The stream extraction process did not finish within its timeout."""

    def __init__(self, index: int, timeout: float) -> None:
        self.index = index
        self.timeout = timeout
        super().__init__(f"Extracting stream #{index} timed out after {timeout:g}s")
