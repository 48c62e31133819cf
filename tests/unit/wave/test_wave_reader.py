import io
import logging
import struct

import pytest

from pcm_wave.errors import (
    InvalidParameters,
    IoFailure,
    MagicNumberMismatch,
    UnimplementedSampleRepresentation,
    UnknownBitsPerSample,
    UnknownFormat,
)
from pcm_wave.sample import SampleType
from pcm_wave.wave.reader import Config, import_wave, import_wave_file
from tests.conftest import build_wave_bytes


def test_reads_mono_u8():
    pcm = import_wave(io.BytesIO(build_wave_bytes(bytes([10, 20, 30]))))
    assert pcm.parameters.sample_rate == 8000
    assert pcm.parameters.nb_channels == 1
    assert pcm.parameters.sample_type is SampleType.UNSIGNED_8BITS
    assert [f.samples[0].value for f in pcm.frames] == [10, 20, 30]
    assert pcm.loop_info is None


def test_reads_stereo_s16():
    payload = struct.pack("<4h", 1, -1, 300, -300)
    raw = build_wave_bytes(payload, nb_channels=2, sample_rate=44100, bits_per_sample=16)
    pcm = import_wave(io.BytesIO(raw))
    assert pcm.parameters.sample_type is SampleType.SIGNED_16BITS
    assert [[s.value for s in f.samples] for f in pcm.frames] == [[1, -1], [300, -300]]


def test_empty_data_chunk_yields_zero_frames():
    pcm = import_wave(io.BytesIO(build_wave_bytes(b"")))
    assert pcm.frames == []


def test_empty_data_chunk_float_header_is_accepted():
    pcm = import_wave(io.BytesIO(build_wave_bytes(b"", audio_format=3, bits_per_sample=32)))
    assert pcm.parameters.sample_type is SampleType.FLOAT
    assert pcm.frames == []


def test_resolvable_but_undecodable_payload():
    raw = build_wave_bytes(b"\x00" * 8, audio_format=3, bits_per_sample=32)
    with pytest.raises(UnimplementedSampleRepresentation):
        import_wave(io.BytesIO(raw))


def test_stops_at_data_size_not_end_of_stream():
    raw = build_wave_bytes(bytes([1, 2, 3])) + b"LISTtrailing-chunk"
    stream = io.BytesIO(raw)
    pcm = import_wave(stream)
    assert len(pcm.frames) == 3
    assert stream.read() == b"LISTtrailing-chunk"


@pytest.mark.parametrize(
    "field,offset",
    [("riff", 0), ("wave", 8), ("fmt", 12), ("data", 36)],
)
def test_corrupt_tag_fails_at_its_position(field, offset):
    raw = build_wave_bytes(bytes([1, 2]), **{field: b"JUNK"})
    with pytest.raises(MagicNumberMismatch) as ei:
        import_wave(io.BytesIO(raw))
    assert ei.value.position == offset
    assert ei.value.found == b"JUNK"


def test_unknown_format_code():
    with pytest.raises(UnknownFormat) as ei:
        import_wave(io.BytesIO(build_wave_bytes(b"", audio_format=0x55)))
    assert ei.value.code == 0x55


@pytest.mark.parametrize("code,bits", [(1, 24), (2, 4), (17, 4), (3, 16)])
def test_unknown_bits_per_sample(code, bits):
    raw = build_wave_bytes(b"", audio_format=code, bits_per_sample=bits)
    with pytest.raises(UnknownBitsPerSample):
        import_wave(io.BytesIO(raw))


def test_truncated_payload_is_io_failure():
    raw = build_wave_bytes(bytes([1, 2, 3]), data_size=10)
    with pytest.raises(IoFailure):
        import_wave(io.BytesIO(raw))


def test_truncated_header_is_io_failure():
    raw = build_wave_bytes(b"")[:30]
    with pytest.raises(IoFailure):
        import_wave(io.BytesIO(raw))


def test_zero_channels_rejected():
    raw = build_wave_bytes(b"\x01", nb_channels=0)
    with pytest.raises(InvalidParameters, match="zero channels"):
        import_wave(io.BytesIO(raw))


def test_zero_sample_rate_rejected():
    raw = build_wave_bytes(b"\x01\x02", sample_rate=0)
    with pytest.raises(InvalidParameters, match="sample_rate"):
        import_wave(io.BytesIO(raw))


def test_partial_frame_dropped_by_default(caplog):
    payload = struct.pack("<3h", 5, 6, 7)  # stereo: one whole frame + half a frame
    raw = build_wave_bytes(payload, nb_channels=2, bits_per_sample=16)
    with caplog.at_level(logging.WARNING, logger="pcm_wave.wave.reader"):
        pcm = import_wave(io.BytesIO(raw))
    assert [[s.value for s in f.samples] for f in pcm.frames] == [[5, 6]]
    assert "partial trailing frame" in caplog.text


def test_partial_frame_strict_mode():
    payload = struct.pack("<3h", 5, 6, 7)
    raw = build_wave_bytes(payload, nb_channels=2, bits_per_sample=16)
    with pytest.raises(InvalidParameters, match="partial frame"):
        import_wave(io.BytesIO(raw), Config(partial_frame="error"))


def test_bad_partial_frame_mode():
    with pytest.raises(ValueError, match="partial_frame"):
        import_wave(io.BytesIO(build_wave_bytes(b"")), Config(partial_frame="pad"))


def test_import_wave_file(tmp_path):
    p = tmp_path / "in.wav"
    p.write_bytes(build_wave_bytes(bytes([9, 8, 7, 6])))
    pcm = import_wave_file(p)
    assert len(pcm.frames) == 4
