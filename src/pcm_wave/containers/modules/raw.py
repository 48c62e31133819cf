from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from pcm_wave.codec import read_raw, write_raw
from pcm_wave.errors import InvalidParameters
from pcm_wave.pcm import PCM, PCMParameters
from pcm_wave.sample import SampleType


@dataclass(frozen=True)
class Config:
    """
    Headerless interleaved payload.

    Nothing on the wire describes the signal, so rx() takes its parameters
    from here. tx() checks the PCM against them so a later rx() with the same
    config reads back what was written.
    """
    sample_rate: int = 8000
    nb_channels: int = 1
    sample_type: SampleType = SampleType.SIGNED_16BITS

    def parameters(self) -> PCMParameters:
        return PCMParameters(
            sample_rate=self.sample_rate,
            nb_channels=self.nb_channels,
            sample_type=self.sample_type,
        )


def tx(pcm: PCM, stream: BinaryIO, *, cfg: Config) -> None:
    pcm.validate()
    if pcm.parameters != cfg.parameters():
        raise InvalidParameters(
            f"raw.tx: pcm parameters {pcm.parameters} do not match cfg {cfg.parameters()}"
        )
    write_raw(pcm, stream)


def rx(stream: BinaryIO, *, cfg: Config) -> PCM:
    pcm, trailing = read_raw(stream, cfg.parameters())
    if trailing:
        raise InvalidParameters(f"raw.rx: payload ends with a partial frame ({trailing} bytes)")
    return pcm
