# src/pcm_wave/pcm.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional

import numpy as np

from pcm_wave.errors import InvalidParameters, UnimplementedSampleRepresentation
from pcm_wave.sample import Sample, SampleType, bytes_per_sample

# numpy dtype used to view each sample type as an array
_ARRAY_DTYPES: Dict[SampleType, np.dtype] = {
    SampleType.UNSIGNED_8BITS: np.dtype(np.uint8),
    SampleType.SIGNED_16BITS: np.dtype(np.int16),
    SampleType.SIGNED_32BITS: np.dtype(np.int32),
    SampleType.FLOAT: np.dtype(np.float32),
    SampleType.DOUBLE_FLOAT: np.dtype(np.float64),
}


@dataclass(frozen=True)
class PCMParameters:
    sample_rate: int
    nb_channels: int
    sample_type: SampleType

    def validate(self) -> None:
        if not isinstance(self.sample_type, SampleType):
            raise InvalidParameters("parameters: sample_type must be a SampleType")
        if not (isinstance(self.sample_rate, int) and self.sample_rate > 0):
            raise InvalidParameters(f"parameters: sample_rate must be > 0, got {self.sample_rate}")
        if not (isinstance(self.nb_channels, int) and self.nb_channels >= 1):
            raise InvalidParameters(f"parameters: nb_channels must be >= 1, got {self.nb_channels}")

    @property
    def frame_size(self) -> int:
        """Bytes per frame on the wire."""
        return self.nb_channels * bytes_per_sample(self.sample_type)


@dataclass(frozen=True)
class LoopInfo:
    """Loop points, in frames."""
    loop_start: int
    loop_end: int


@dataclass
class Frame:
    """One time slice: a sample per channel."""
    samples: List[Sample] = field(default_factory=list)

    def audio_size(self) -> int:
        if not self.samples:
            return 0
        return len(self.samples) * bytes_per_sample(self.samples[0].sample_type)


@dataclass
class PCM:
    """
    Decoded multi-channel signal.

    Invariants (checked by validate()):
      - every frame has exactly parameters.nb_channels samples
      - every sample is of parameters.sample_type
    """
    parameters: PCMParameters
    frames: List[Frame] = field(default_factory=list)
    loop_info: Optional[List[LoopInfo]] = None

    # ----------------------------
    # Invariants / cloning
    # ----------------------------

    def validate(self) -> None:
        self.parameters.validate()
        nch = self.parameters.nb_channels
        st = self.parameters.sample_type
        for i, frame in enumerate(self.frames):
            if len(frame.samples) != nch:
                raise InvalidParameters(
                    f"frame {i}: expected {nch} samples, got {len(frame.samples)}"
                )
            for s in frame.samples:
                if s.sample_type is not st:
                    raise InvalidParameters(
                        f"frame {i}: sample type {s.sample_type} does not match {st}"
                    )

    def copy(self) -> "PCM":
        """Independent clone. Samples, parameters and loop points are immutable and shared."""
        return PCM(
            parameters=self.parameters,
            frames=[Frame(list(f.samples)) for f in self.frames],
            loop_info=list(self.loop_info) if self.loop_info is not None else None,
        )

    # ----------------------------
    # Derived metrics
    # ----------------------------

    @property
    def nb_frames(self) -> int:
        return len(self.frames)

    def audio_size(self) -> int:
        """Size of the raw interleaved payload in bytes."""
        return len(self.frames) * self.parameters.frame_size

    def audio_duration(self) -> float:
        """Duration in seconds."""
        return len(self.frames) / float(self.parameters.sample_rate)

    def audio_timedelta(self) -> timedelta:
        return timedelta(seconds=self.audio_duration())

    # ----------------------------
    # numpy interop
    # ----------------------------

    def to_array(self) -> np.ndarray:
        """Return samples as an array of shape (frames, channels)."""
        st = self.parameters.sample_type
        dtype = _ARRAY_DTYPES.get(st)
        if dtype is None:
            raise UnimplementedSampleRepresentation(st, operation="to_array")
        nch = self.parameters.nb_channels
        out = np.empty((len(self.frames), nch), dtype=dtype)
        for i, frame in enumerate(self.frames):
            out[i, :] = [s.value for s in frame.samples]
        return out

    @classmethod
    def from_array(cls, x: np.ndarray, sample_rate: int, sample_type: SampleType) -> "PCM":
        """
        Build a PCM from a 1-D (mono) or 2-D (frames, channels) array.
        Values are cast to the sample type's dtype; out-of-range values are rejected.
        """
        dtype = _ARRAY_DTYPES.get(sample_type)
        if dtype is None:
            raise UnimplementedSampleRepresentation(sample_type, operation="from_array")

        a = np.asarray(x)
        if a.ndim == 1:
            a = a.reshape(-1, 1)
        if a.ndim != 2:
            raise InvalidParameters(f"from_array: expected 1-D or 2-D array, got ndim={a.ndim}")

        if dtype.kind in "iu":
            info = np.iinfo(dtype)
            if a.size and (a.min() < info.min or a.max() > info.max):
                raise InvalidParameters(f"from_array: values out of range for {sample_type}")
        a = a.astype(dtype, copy=False)

        params = PCMParameters(
            sample_rate=int(sample_rate),
            nb_channels=int(a.shape[1]),
            sample_type=sample_type,
        )
        frames = [Frame([Sample(sample_type, v) for v in row.tolist()]) for row in a]
        pcm = cls(parameters=params, frames=frames)
        pcm.validate()
        return pcm
