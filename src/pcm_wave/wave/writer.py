# src/pcm_wave/wave/writer.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from pcm_wave.codec import supports, write_raw
from pcm_wave.errors import InvalidParameters, TooManyFrames, TooMuchData, UnimplementedSampleRepresentation
from pcm_wave.io.magic import DATA, FACT, FMT, RIFF, WAVE
from pcm_wave.io.primitives import write_u16_le, write_u32_le
from pcm_wave.pcm import PCM
from pcm_wave.sample import bytes_per_sample
from pcm_wave.wave.format import best_format, format_extension_size, needs_fact_chunk

logger = logging.getLogger("pcm_wave.wave.writer")

PathLike = Union[str, Path]

U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF

CHUNK_HEADER_LEN = 8  # tag(4) + size(4)
FMT_BASE_SIZE = 16
FACT_INTERIOR_SIZE = 4


@dataclass(frozen=True)
class ChunkLayout:
    """Sizes computed before anything is written."""
    format_code: int
    fmt_size: int
    has_fact: bool
    data_size: int
    riff_size: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    @property
    def total_size(self) -> int:
        return CHUNK_HEADER_LEN + self.riff_size


def _check_field(name: str, value: int, hi: int) -> None:
    if value > hi:
        raise InvalidParameters(f"export: {name} {value} does not fit its fmt field (max {hi})")


def plan_layout(pcm: PCM) -> ChunkLayout:
    """
    Compute every chunk size for pcm, raising before any byte is emitted.

    Order of checks: data size overflow, unsupported fmt extension,
    fact frame count overflow, RIFF size overflow, fmt field widths.
    """
    params = pcm.parameters
    st = params.sample_type
    nb_frames = len(pcm.frames)

    data_size = pcm.audio_size()
    if data_size > U32_MAX:
        raise TooMuchData(data_size)

    extension = format_extension_size(st)
    if extension != 0:
        raise UnimplementedSampleRepresentation(st, operation="fmt chunk extension")
    fmt_size = FMT_BASE_SIZE + extension

    has_fact = needs_fact_chunk(st)
    if has_fact and nb_frames > U32_MAX:
        raise TooManyFrames(nb_frames)

    riff_size = (
        len(WAVE)
        + (CHUNK_HEADER_LEN + fmt_size)
        + ((CHUNK_HEADER_LEN + FACT_INTERIOR_SIZE) if has_fact else 0)
        + (CHUNK_HEADER_LEN + data_size)
    )
    if riff_size > U32_MAX:
        raise TooMuchData(riff_size)

    bps = bytes_per_sample(st)
    byte_rate = params.sample_rate * params.nb_channels * bps
    block_align = params.nb_channels * bps
    _check_field("channel count", params.nb_channels, U16_MAX)
    _check_field("sample rate", params.sample_rate, U32_MAX)
    _check_field("byte rate", byte_rate, U32_MAX)
    _check_field("block align", block_align, U16_MAX)

    return ChunkLayout(
        format_code=best_format(st),
        fmt_size=fmt_size,
        has_fact=has_fact,
        data_size=data_size,
        riff_size=riff_size,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=st.bits,
    )


def export_wave(pcm: PCM, stream: BinaryIO) -> ChunkLayout:
    """
    Serialize pcm as RIFF/WAVE into stream.

    Nothing is written if validation or sizing fails. A failure of the
    stream itself leaves it truncated; the caller must discard it.
    """
    pcm.validate()
    layout = plan_layout(pcm)

    st = pcm.parameters.sample_type
    if pcm.frames and not supports(st):
        raise UnimplementedSampleRepresentation(st, operation="encode")

    params = pcm.parameters
    logger.debug(
        "export: format=%d channels=%d rate=%d bits=%d frames=%d fact=%s riff=%d",
        layout.format_code, params.nb_channels, params.sample_rate,
        layout.bits_per_sample, len(pcm.frames), layout.has_fact, layout.riff_size,
    )

    stream.write(RIFF)
    write_u32_le(stream, layout.riff_size)
    stream.write(WAVE)

    stream.write(FMT)
    write_u32_le(stream, layout.fmt_size)
    write_u16_le(stream, layout.format_code)
    write_u16_le(stream, params.nb_channels)
    write_u32_le(stream, params.sample_rate)
    write_u32_le(stream, layout.byte_rate)
    write_u16_le(stream, layout.block_align)
    write_u16_le(stream, layout.bits_per_sample)

    if layout.has_fact:
        stream.write(FACT)
        write_u32_le(stream, FACT_INTERIOR_SIZE)
        write_u32_le(stream, len(pcm.frames))

    stream.write(DATA)
    write_u32_le(stream, layout.data_size)
    write_raw(pcm, stream)
    return layout


def export_wave_file(path: PathLike, pcm: PCM) -> ChunkLayout:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("wb") as f:
        return export_wave(pcm, f)
