# src/pcm_wave/errors.py
from __future__ import annotations

from typing import Any, Optional


class PCMError(Exception):
    """Base class for every error raised by the codec."""


class IoFailure(PCMError, EOFError):
    """The stream ended before a field or the sample payload was complete."""

    def __init__(self, wanted: int, got: int, what: str = "bytes"):
        self.wanted = wanted
        self.got = got
        super().__init__(f"short read for {what}: wanted {wanted} bytes, got {got}")


class MagicNumberMismatch(PCMError, ValueError):
    def __init__(self, expected: bytes, found: bytes, position: Optional[int] = None):
        self.expected = expected
        self.found = found
        self.position = position
        where = f" at offset {position}" if position is not None else ""
        super().__init__(f"bad magic{where}: expected {expected!r}, found {found!r}")


class UnknownFormat(PCMError, ValueError):
    def __init__(self, code: int):
        self.code = code
        super().__init__(f"unknown audio format 0x{code:X}")


class UnknownBitsPerSample(PCMError, ValueError):
    def __init__(self, bits_per_sample: int):
        self.bits_per_sample = bits_per_sample
        super().__init__(f"cannot infer a sample type from bits per sample: {bits_per_sample}")


class TooMuchData(PCMError, ValueError):
    def __init__(self, size: int):
        self.size = size
        super().__init__(f"audio data too large for a WAVE size field: {size} bytes")


class TooManyFrames(PCMError, ValueError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"too many frames for a WAVE fact chunk: {count}")


class UnimplementedSampleRepresentation(PCMError, NotImplementedError):
    def __init__(self, sample_type: Any, operation: str = "codec"):
        self.sample_type = sample_type
        self.operation = operation
        super().__init__(f"{operation}: not implemented for sample type {sample_type}")


class InvalidParameters(PCMError, ValueError):
    """PCM invariants violated (channel count, sample types, partial frames)."""
