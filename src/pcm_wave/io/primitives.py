# src/pcm_wave/io/primitives.py
from __future__ import annotations

import struct
from typing import BinaryIO

from pcm_wave.errors import IoFailure

# Little-endian fixed-width integers
_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")


def read_exact(stream: BinaryIO, n: int, what: str = "bytes") -> bytes:
    """Read exactly n bytes or raise IoFailure."""
    if n < 0:
        raise ValueError("read_exact: n must be >= 0")
    b = stream.read(n)
    if b is None:
        b = b""
    if len(b) != n:
        raise IoFailure(n, len(b), what)
    return bytes(b)


def _read(stream: BinaryIO, st: struct.Struct, what: str) -> int:
    (v,) = st.unpack(read_exact(stream, st.size, what))
    return v


def read_u8(stream: BinaryIO, what: str = "u8") -> int:
    return _read(stream, _U8, what)


def read_u16_le(stream: BinaryIO, what: str = "u16") -> int:
    return _read(stream, _U16, what)


def read_i16_le(stream: BinaryIO, what: str = "i16") -> int:
    return _read(stream, _I16, what)


def read_u32_le(stream: BinaryIO, what: str = "u32") -> int:
    return _read(stream, _U32, what)


def _write(stream: BinaryIO, st: struct.Struct, value: int, name: str) -> None:
    try:
        stream.write(st.pack(value))
    except struct.error as e:
        raise ValueError(f"{name}: value {value} out of range") from e


def write_u8(stream: BinaryIO, value: int) -> None:
    _write(stream, _U8, value, "write_u8")


def write_u16_le(stream: BinaryIO, value: int) -> None:
    _write(stream, _U16, value, "write_u16_le")


def write_i16_le(stream: BinaryIO, value: int) -> None:
    _write(stream, _I16, value, "write_i16_le")


def write_u32_le(stream: BinaryIO, value: int) -> None:
    _write(stream, _U32, value, "write_u32_le")
