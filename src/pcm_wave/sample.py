# src/pcm_wave/sample.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Dict, Optional, Tuple, Union

from pcm_wave.errors import InvalidParameters, UnimplementedSampleRepresentation


class SampleType(Enum):
    """
    Tag of the closed set of sample representations.

    IMA/Microsoft ADPCM and 24-bit integers exist in the model but have no
    payload codec; they only participate in header sizing.
    """
    UNSIGNED_8BITS = "u8"
    SIGNED_16BITS = "s16"
    SIGNED_24BITS = "s24"
    SIGNED_32BITS = "s32"
    IMA_ADPCM = "ima_adpcm"
    MICROSOFT_ADPCM = "ms_adpcm"
    FLOAT = "f32"
    DOUBLE_FLOAT = "f64"

    @property
    def bits(self) -> int:
        return _BITS[self]

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]


# Per-variant tables. Every SampleType must appear in each of them.
_BITS: Dict[SampleType, int] = {
    SampleType.UNSIGNED_8BITS: 8,
    SampleType.SIGNED_16BITS: 16,
    SampleType.SIGNED_24BITS: 24,
    SampleType.SIGNED_32BITS: 32,
    SampleType.IMA_ADPCM: 4,
    SampleType.MICROSOFT_ADPCM: 4,
    SampleType.FLOAT: 32,
    SampleType.DOUBLE_FLOAT: 64,
}

_DISPLAY_NAMES: Dict[SampleType, str] = {
    SampleType.UNSIGNED_8BITS: "Unsigned 8 bits",
    SampleType.SIGNED_16BITS: "Signed 16 bits",
    SampleType.SIGNED_24BITS: "Signed 24 bits",
    SampleType.SIGNED_32BITS: "Signed 32 bits",
    SampleType.IMA_ADPCM: "IMA ADPCM",
    SampleType.MICROSOFT_ADPCM: "Microsoft ADPCM",
    SampleType.FLOAT: "Float",
    SampleType.DOUBLE_FLOAT: "Double-precision Float",
}

# inclusive (lo, hi)
_INT_RANGES: Dict[SampleType, Tuple[int, int]] = {
    SampleType.UNSIGNED_8BITS: (0, 0xFF),
    SampleType.SIGNED_16BITS: (-(1 << 15), (1 << 15) - 1),
    SampleType.SIGNED_24BITS: (-(1 << 23), (1 << 23) - 1),
    SampleType.SIGNED_32BITS: (-(1 << 31), (1 << 31) - 1),
}

_FLOAT_TYPES = (SampleType.FLOAT, SampleType.DOUBLE_FLOAT)

# Full-scale divisor used by to_double_float()
_FULL_SCALE: Dict[SampleType, float] = {
    SampleType.SIGNED_16BITS: float((1 << 15) - 1),
    SampleType.SIGNED_32BITS: float((1 << 31) - 1),
}

SampleValue = Optional[Union[int, float]]


@dataclass(frozen=True, slots=True)
class Sample:
    """
    One amplitude value, tagged with its representation.

    Integer variants hold an int in the variant's range, float variants hold
    a float, ADPCM placeholders hold None.
    """
    sample_type: SampleType
    value: SampleValue = None

    def __post_init__(self) -> None:
        st = self.sample_type
        if not isinstance(st, SampleType):
            raise TypeError(f"sample_type must be SampleType, got {type(st).__name__}")

        v = self.value
        if st in _INT_RANGES:
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise TypeError(f"{st}: value must be int, got {type(v).__name__}")
            v = int(v)
            object.__setattr__(self, "value", v)
            lo, hi = _INT_RANGES[st]
            if not (lo <= v <= hi):
                raise InvalidParameters(f"{st}: value {v} out of range [{lo},{hi}]")
        elif st in _FLOAT_TYPES:
            if isinstance(v, bool) or not isinstance(v, Real):
                raise TypeError(f"{st}: value must be float, got {type(v).__name__}")
            object.__setattr__(self, "value", float(v))
        elif v is not None:
            raise InvalidParameters(f"{st}: placeholder samples carry no value")

    @staticmethod
    def zero(sample_type: SampleType) -> "Sample":
        """Default-payload sample of a variant (conveys the variant only)."""
        if sample_type in _INT_RANGES:
            return Sample(sample_type, 0)
        if sample_type in _FLOAT_TYPES:
            return Sample(sample_type, 0.0)
        return Sample(sample_type, None)

    def to_double_float(self) -> "Sample":
        """
        Convert to a DOUBLE_FLOAT sample in [-1, 1].

        u8 maps 0..255 onto -1..1; signed integers divide by their positive
        full scale.
        """
        st = self.sample_type
        if st is SampleType.UNSIGNED_8BITS:
            return Sample(SampleType.DOUBLE_FLOAT, (self.value * 2.0) / 255.0 - 1.0)
        if st in _FULL_SCALE:
            return Sample(SampleType.DOUBLE_FLOAT, self.value / _FULL_SCALE[st])
        raise UnimplementedSampleRepresentation(st, operation="to_double_float")

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self.sample_type]


def bytes_per_sample(sample_type: SampleType) -> int:
    """Whole bytes per sample (0 for the 4-bit ADPCM placeholders)."""
    return _BITS[sample_type] // 8
