# src/pcm_wave/codec.py
from __future__ import annotations

import struct
from typing import BinaryIO, Dict, List, Sequence, Tuple

import numpy as np

from pcm_wave.errors import UnimplementedSampleRepresentation
from pcm_wave.io.primitives import read_exact
from pcm_wave.pcm import PCM, Frame, PCMParameters
from pcm_wave.sample import Sample, SampleType

# Only these representations have a payload codec. Everything else is
# modeled but deliberately not transferable.
_WIRE_DTYPES: Dict[SampleType, np.dtype] = {
    SampleType.UNSIGNED_8BITS: np.dtype("<u1"),
    SampleType.SIGNED_16BITS: np.dtype("<i2"),
}

# Same layouts, one sample at a time
_SAMPLE_STRUCTS: Dict[SampleType, struct.Struct] = {
    st: struct.Struct("<" + dt.char) for st, dt in _WIRE_DTYPES.items()
}


def supports(sample_type: SampleType) -> bool:
    """True if samples of this type can be decoded/encoded as raw bytes."""
    return sample_type in _WIRE_DTYPES


def _struct_for(sample_type: SampleType, operation: str) -> struct.Struct:
    st = _SAMPLE_STRUCTS.get(sample_type)
    if st is None:
        raise UnimplementedSampleRepresentation(sample_type, operation=operation)
    return st


# ----------------------------
# Single sample
# ----------------------------

def decode_one(cursor: BinaryIO, sample_type: SampleType) -> Sample:
    st = _struct_for(sample_type, "decode_one")
    (v,) = st.unpack(read_exact(cursor, st.size, str(sample_type)))
    return Sample(sample_type, v)


def encode_one(writer: BinaryIO, sample: Sample) -> None:
    st = _struct_for(sample.sample_type, "encode_one")
    writer.write(st.pack(sample.value))


# ----------------------------
# Whole payloads
# ----------------------------

def decode_frames(buf: bytes, sample_type: SampleType, nb_channels: int) -> Tuple[List[Frame], int]:
    """
    Decode interleaved frames from buf.

    Returns (frames, trailing_bytes) where trailing_bytes counts the bytes of
    an incomplete final frame that were not decoded.
    """
    if nb_channels < 1:
        raise ValueError("decode_frames: nb_channels must be >= 1")
    if len(buf) == 0:
        return [], 0

    dtype = _WIRE_DTYPES.get(sample_type)
    if dtype is None:
        raise UnimplementedSampleRepresentation(sample_type, operation="decode")

    frame_size = dtype.itemsize * nb_channels
    n_frames = len(buf) // frame_size
    trailing = len(buf) - n_frames * frame_size

    x = np.frombuffer(buf, dtype=dtype, count=n_frames * nb_channels).reshape(n_frames, nb_channels)
    frames = [Frame([Sample(sample_type, v) for v in row]) for row in x.tolist()]
    return frames, trailing


def encode_frames(frames: Sequence[Frame], sample_type: SampleType) -> bytes:
    """Interleave frames (frame-major, channel-minor) into raw bytes."""
    if len(frames) == 0:
        return b""

    dtype = _WIRE_DTYPES.get(sample_type)
    if dtype is None:
        raise UnimplementedSampleRepresentation(sample_type, operation="encode")

    values = [s.value for f in frames for s in f.samples]
    return np.asarray(values, dtype=dtype).tobytes()


def write_raw(pcm: PCM, stream: BinaryIO) -> int:
    """Write only the sample payload of pcm. Returns bytes written."""
    payload = encode_frames(pcm.frames, pcm.parameters.sample_type)
    stream.write(payload)
    return len(payload)


def read_raw(stream: BinaryIO, parameters: PCMParameters, size: int = -1) -> Tuple[PCM, int]:
    """
    Decode a headerless payload with known parameters.

    size=-1 reads to end of stream; otherwise exactly size bytes are required.
    Returns (pcm, trailing_bytes).
    """
    parameters.validate()
    if size < 0:
        buf = stream.read()
        buf = bytes(buf) if buf else b""
    else:
        buf = read_exact(stream, size, "raw payload")

    frames, trailing = decode_frames(buf, parameters.sample_type, parameters.nb_channels)
    return PCM(parameters=parameters, frames=frames, loop_info=None), trailing

