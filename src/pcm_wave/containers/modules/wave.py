from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from pcm_wave.pcm import PCM
from pcm_wave.wave import reader, writer


@dataclass(frozen=True)
class Config:
    """
    RIFF/WAVE container.

    partial_frame: what the reader does with an incomplete trailing frame
      ("drop" or "error")
    """
    partial_frame: str = "drop"


def tx(pcm: PCM, stream: BinaryIO, *, cfg: Config) -> None:
    writer.export_wave(pcm, stream)


def rx(stream: BinaryIO, *, cfg: Config) -> PCM:
    return reader.import_wave(stream, reader.Config(partial_frame=cfg.partial_frame))
