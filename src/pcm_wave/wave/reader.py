# src/pcm_wave/wave/reader.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from pcm_wave.codec import decode_frames
from pcm_wave.errors import InvalidParameters
from pcm_wave.io.magic import DATA, FMT, RIFF, WAVE, verify_magic
from pcm_wave.io.primitives import read_exact, read_u16_le, read_u32_le
from pcm_wave.pcm import PCM, PCMParameters
from pcm_wave.wave.format import resolve

logger = logging.getLogger("pcm_wave.wave.reader")

PathLike = Union[str, Path]

PARTIAL_FRAME_MODES = ("drop", "error")


@dataclass(frozen=True)
class Config:
    """
    Reader options.

    partial_frame:
      - "drop": silently discard an incomplete trailing frame (logged)
      - "error": raise InvalidParameters instead
    """
    partial_frame: str = "drop"


def import_wave(stream: BinaryIO, cfg: Optional[Config] = None) -> PCM:
    """
    Parse a RIFF/WAVE byte stream into a PCM.

    Layout expected, in order, with no chunk skipping:
      RIFF size WAVE | fmt  size format channels rate byte_rate align bits | data size payload
    The declared RIFF and fmt sizes are read but not used to bound parsing.
    """
    cfg = cfg if cfg is not None else Config()
    if cfg.partial_frame not in PARTIAL_FRAME_MODES:
        raise ValueError(f"import_wave: cfg.partial_frame must be one of {PARTIAL_FRAME_MODES}")

    verify_magic(stream, RIFF)
    _riff_size = read_u32_le(stream, "RIFF chunk size")
    verify_magic(stream, WAVE)

    verify_magic(stream, FMT)
    _fmt_size = read_u32_le(stream, "fmt chunk size")
    audio_format = read_u16_le(stream, "audio format")
    nb_channels = read_u16_le(stream, "channel count")
    sample_rate = read_u32_le(stream, "sample rate")
    _byte_rate = read_u32_le(stream, "byte rate")
    _block_align = read_u16_le(stream, "block align")
    bits_per_sample = read_u16_le(stream, "bits per sample")

    sample_type = resolve(audio_format, bits_per_sample)
    if nb_channels == 0:
        raise InvalidParameters("import_wave: fmt chunk declares zero channels")
    parameters = PCMParameters(
        sample_rate=sample_rate,
        nb_channels=nb_channels,
        sample_type=sample_type,
    )
    parameters.validate()

    verify_magic(stream, DATA)
    data_size = read_u32_le(stream, "data chunk size")
    logger.debug(
        "fmt: format=%d channels=%d rate=%d bits=%d -> %s; data=%d bytes",
        audio_format, nb_channels, sample_rate, bits_per_sample, sample_type, data_size,
    )

    data = read_exact(stream, data_size, "data chunk")
    frames, trailing = decode_frames(data, sample_type, nb_channels)

    if trailing:
        if cfg.partial_frame == "error":
            raise InvalidParameters(
                f"import_wave: data chunk ends with a partial frame ({trailing} trailing bytes)"
            )
        logger.warning("dropping partial trailing frame (%d bytes)", trailing)

    return PCM(parameters=parameters, frames=frames, loop_info=None)


def import_wave_file(path: PathLike, cfg: Optional[Config] = None) -> PCM:
    p = Path(path)
    with p.open("rb") as f:
        return import_wave(f, cfg)
