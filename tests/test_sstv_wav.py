"""Tests for WAV serialization."""

import io
import struct

import numpy as np
import pytest

from sstvtx.encoder.exceptions import InvalidParameter
from sstvtx.encoder.wav import encode_samples, to_wav_bytes, wav_header, write_wav


class TestHeader:
    """Tests for the 44-byte RIFF header."""

    def test_mono_44100_100_samples(self):
        data = to_wav_bytes(np.zeros(100), 44100)
        assert len(data) == 44 + 100 * 1 * 2
        assert data[0:4] == b'RIFF'
        assert struct.unpack('<I', data[4:8])[0] == len(data) - 8
        assert data[8:12] == b'WAVE'
        assert data[36:40] == b'data'
        assert struct.unpack('<I', data[40:44])[0] == len(data) - 44

    def test_fmt_chunk(self):
        header = wav_header(10, 2, 48000)
        (fmt_id, fmt_len, audio_format, channels, sample_rate,
         byte_rate, block_align, bits) = struct.unpack('<4sIHHIIHH', header[12:36])
        assert fmt_id == b'fmt '
        assert fmt_len == 16
        assert audio_format == 1
        assert channels == 2
        assert sample_rate == 48000
        assert byte_rate == 48000 * 2 * 2
        assert block_align == 4
        assert bits == 16

    def test_header_size(self):
        assert len(wav_header(0, 1, 8000)) == 44

    @pytest.mark.parametrize('frames,channels,rate', [
        (10, 0, 44100),
        (10, 1, 0),
        (10, 1, 44100.5),
        (-1, 1, 44100),
    ])
    def test_invalid_header_parameters(self, frames, channels, rate):
        with pytest.raises(InvalidParameter):
            wav_header(frames, channels, rate)


class TestSampleWords:
    """Tests for sample scaling."""

    def test_scaling(self):
        words = np.frombuffer(encode_samples([-1.0, 0.0, 1.0]), dtype='<u2')
        assert words.tolist() == [0, 32768, 65535]

    def test_clamping(self):
        words = np.frombuffer(encode_samples([-3.0, 2.5]), dtype='<u2')
        assert words.tolist() == [0, 65535]

    def test_little_endian(self):
        assert encode_samples([1.0]) == b'\xff\xff'
        assert encode_samples([0.0]) == b'\x00\x80'

    def test_stereo_interleaving(self):
        frames = np.array([[-1.0, 1.0], [1.0, -1.0]])
        words = np.frombuffer(encode_samples(frames), dtype='<u2')
        assert words.tolist() == [0, 65535, 65535, 0]

    def test_stereo_header(self):
        frames = np.zeros((5, 2))
        data = to_wav_bytes(frames, 8000)
        assert len(data) == 44 + 5 * 2 * 2
        assert struct.unpack('<H', data[22:24])[0] == 2

    def test_bad_dimensions(self):
        with pytest.raises(InvalidParameter):
            encode_samples(np.zeros((2, 2, 2)))


class TestWriteWav:
    """Tests for writing to files."""

    def test_write_to_path(self, tmp_path):
        path = tmp_path / 'out.wav'
        written = write_wav(path, np.zeros(20), 8000)
        assert written == 84
        assert path.read_bytes()[:4] == b'RIFF'

    def test_write_to_file_object(self):
        buf = io.BytesIO()
        written = write_wav(buf, np.ones(3), 8000)
        assert written == len(buf.getvalue()) == 50
        assert buf.getvalue()[44:] == b'\xff\xff' * 3
