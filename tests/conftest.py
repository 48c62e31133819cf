from __future__ import annotations

import struct
from typing import Optional, Sequence

import pytest

from pcm_wave.pcm import PCM, Frame, PCMParameters
from pcm_wave.sample import Sample, SampleType


def build_wave_bytes(
    payload: bytes = b"",
    *,
    audio_format: int = 1,
    nb_channels: int = 1,
    sample_rate: int = 8000,
    bits_per_sample: int = 8,
    data_size: Optional[int] = None,
    riff: bytes = b"RIFF",
    wave: bytes = b"WAVE",
    fmt: bytes = b"fmt ",
    data: bytes = b"data",
) -> bytes:
    """
    Hand-built canonical 44-byte-header WAVE file (no fact chunk).
    Every tag and field can be overridden to produce broken inputs.
    """
    bps = bits_per_sample // 8
    size = len(payload) if data_size is None else data_size
    return (
        riff
        + struct.pack("<I", 36 + size)
        + wave
        + fmt
        + struct.pack(
            "<IHHIIHH",
            16,
            audio_format,
            nb_channels,
            sample_rate,
            sample_rate * nb_channels * bps,
            nb_channels * bps,
            bits_per_sample,
        )
        + data
        + struct.pack("<I", size)
        + payload
    )


def make_pcm(
    rows: Sequence[Sequence],
    *,
    sample_type: SampleType = SampleType.UNSIGNED_8BITS,
    sample_rate: int = 8000,
    nb_channels: Optional[int] = None,
) -> PCM:
    """Build a PCM from per-frame value lists."""
    if nb_channels is None:
        nb_channels = len(rows[0]) if rows else 1
    params = PCMParameters(sample_rate=sample_rate, nb_channels=nb_channels, sample_type=sample_type)
    frames = [Frame([Sample(sample_type, v) for v in row]) for row in rows]
    return PCM(parameters=params, frames=frames)


@pytest.fixture
def mono_u8_pcm() -> PCM:
    """Mono 8 kHz u8 signal [10, 20, 30]."""
    return make_pcm([[10], [20], [30]])


@pytest.fixture
def stereo_s16_pcm() -> PCM:
    return make_pcm(
        [[0, -1], [32767, -32768], [1234, -4321], [-7, 7]],
        sample_type=SampleType.SIGNED_16BITS,
        sample_rate=44100,
    )
