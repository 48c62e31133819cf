# src/pcm_wave/io/magic.py
from __future__ import annotations

from typing import BinaryIO, Optional

from pcm_wave.errors import MagicNumberMismatch

RIFF = b"RIFF"
WAVE = b"WAVE"
FMT = b"fmt "  # trailing space is part of the tag
FACT = b"fact"
DATA = b"data"


def _tell(stream: BinaryIO) -> Optional[int]:
    try:
        return stream.tell()
    except (AttributeError, OSError):
        return None


def verify_magic(stream: BinaryIO, expected: bytes) -> None:
    """
    Read len(expected) bytes and fail fast if they differ.

    A short read is reported as a mismatch too: the tag is simply not there.
    """
    position = _tell(stream)
    found = stream.read(len(expected)) or b""
    if bytes(found) != expected:
        raise MagicNumberMismatch(expected, bytes(found), position)
