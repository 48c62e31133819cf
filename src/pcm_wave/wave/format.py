# src/pcm_wave/wave/format.py
from __future__ import annotations

from typing import Dict

from pcm_wave.errors import UnknownBitsPerSample, UnknownFormat
from pcm_wave.sample import SampleType

# WAVE_FORMAT_* codes found in the fmt chunk
FORMAT_PCM = 1
FORMAT_MS_ADPCM = 2
FORMAT_IEEE_FLOAT = 3
FORMAT_IMA_ADPCM = 17

# Wire-readable (format, bits) combinations. ADPCM formats are known but
# have no entries: every width is rejected until a decoder exists.
# 24-bit integer PCM is likewise absent.
_RESOLVE_TABLE: Dict[int, Dict[int, SampleType]] = {
    FORMAT_PCM: {
        8: SampleType.UNSIGNED_8BITS,
        16: SampleType.SIGNED_16BITS,
        32: SampleType.SIGNED_32BITS,
    },
    FORMAT_MS_ADPCM: {},
    FORMAT_IEEE_FLOAT: {
        32: SampleType.FLOAT,
        64: SampleType.DOUBLE_FLOAT,
    },
    FORMAT_IMA_ADPCM: {},
}

_BEST_FORMAT: Dict[SampleType, int] = {
    SampleType.UNSIGNED_8BITS: FORMAT_PCM,
    SampleType.SIGNED_16BITS: FORMAT_PCM,
    SampleType.SIGNED_24BITS: FORMAT_PCM,
    SampleType.SIGNED_32BITS: FORMAT_PCM,
    SampleType.MICROSOFT_ADPCM: FORMAT_MS_ADPCM,
    SampleType.FLOAT: FORMAT_IEEE_FLOAT,
    SampleType.DOUBLE_FLOAT: FORMAT_IEEE_FLOAT,
    SampleType.IMA_ADPCM: FORMAT_IMA_ADPCM,
}

# Extra bytes appended to the 16-byte fmt chunk body
_FORMAT_EXTENSION_SIZE: Dict[SampleType, int] = {
    SampleType.UNSIGNED_8BITS: 0,
    SampleType.SIGNED_16BITS: 0,
    SampleType.SIGNED_24BITS: 0,
    SampleType.SIGNED_32BITS: 0,
    SampleType.MICROSOFT_ADPCM: 34,
    SampleType.FLOAT: 0,
    SampleType.DOUBLE_FLOAT: 0,
    SampleType.IMA_ADPCM: 4,
}


def resolve(format_code: int, bits_per_sample: int) -> SampleType:
    """
    Map a fmt chunk (audio format, bits per sample) pair to a sample type.

    Raises UnknownFormat for codes outside the table and UnknownBitsPerSample
    for widths the format does not support.
    """
    widths = _RESOLVE_TABLE.get(format_code)
    if widths is None:
        raise UnknownFormat(format_code)
    sample_type = widths.get(bits_per_sample)
    if sample_type is None:
        raise UnknownBitsPerSample(bits_per_sample)
    return sample_type


def best_format(sample_type: SampleType) -> int:
    """Format code to use when writing this sample type."""
    return _BEST_FORMAT[sample_type]


def format_extension_size(sample_type: SampleType) -> int:
    return _FORMAT_EXTENSION_SIZE[sample_type]


def needs_fact_chunk(sample_type: SampleType) -> bool:
    """Every format other than integer PCM carries a fact chunk."""
    return _BEST_FORMAT[sample_type] != FORMAT_PCM
