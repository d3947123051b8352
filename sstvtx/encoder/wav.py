"""WAV container serialization.

Writes a canonical 44-byte RIFF/WAVE header followed by interleaved
little-endian 16-bit words. Samples in [-1, 1] are offset into the
unsigned range: ``round((0.5 + 0.5 * s) * 65535)``.
"""

from __future__ import annotations

import os
import struct
from typing import BinaryIO, Union

import numpy as np

from .exceptions import InvalidParameter

WAV_HEADER_SIZE = 44
BYTES_PER_SAMPLE = 2
BITS_PER_SAMPLE = 16
WAVE_FORMAT_PCM = 1

_HEADER = struct.Struct('<4sI4s4sIHHIIHH4sI')


def wav_header(num_frames: int, channels: int, sample_rate: int) -> bytes:
    """Build the 44-byte header for ``num_frames`` frames.

    Args:
        num_frames: Samples per channel.
        channels: Channel count.
        sample_rate: Sample rate (Hz).

    Returns:
        Header bytes.
    """
    if channels <= 0:
        raise InvalidParameter(f'Channel count must be positive: {channels}')
    if sample_rate <= 0 or int(sample_rate) != sample_rate:
        raise InvalidParameter(f'Sample rate must be a positive integer: {sample_rate}')
    if num_frames < 0:
        raise InvalidParameter(f'Frame count must not be negative: {num_frames}')

    sample_rate = int(sample_rate)
    data_size = num_frames * channels * BYTES_PER_SAMPLE
    length = data_size + WAV_HEADER_SIZE
    return _HEADER.pack(
        b'RIFF', length - 8, b'WAVE',
        b'fmt ', 16, WAVE_FORMAT_PCM, channels,
        sample_rate, sample_rate * BYTES_PER_SAMPLE * channels,
        channels * BYTES_PER_SAMPLE, BITS_PER_SAMPLE,
        b'data', data_size,
    )


def _as_frames(samples) -> np.ndarray:
    array = np.asarray(samples, dtype=np.float64)
    if array.ndim == 1:
        return array.reshape(-1, 1)
    if array.ndim == 2:
        return array
    raise InvalidParameter(f'Samples must be 1-D or (frames, channels), got {array.ndim}-D')


def encode_samples(samples) -> bytes:
    """Interleaved 16-bit data words for mono or ``(frames, channels)`` samples."""
    frames = _as_frames(samples)
    scaled = (0.5 + 0.5 * np.clip(frames, -1.0, 1.0)) * 0xFFFF
    words = np.floor(scaled + 0.5).astype('<u2')
    return words.tobytes()


def to_wav_bytes(samples, sample_rate: int) -> bytes:
    """Serialize samples into a complete WAV file image."""
    frames = _as_frames(samples)
    return wav_header(frames.shape[0], frames.shape[1], sample_rate) + encode_samples(frames)


def write_wav(target: Union[str, os.PathLike, BinaryIO], samples, sample_rate: int) -> int:
    """Write a WAV file to a path or binary file object.

    Returns:
        Number of bytes written.
    """
    data = to_wav_bytes(samples, sample_rate)
    if hasattr(target, 'write'):
        target.write(data)
    else:
        with open(target, 'wb') as f:
            f.write(data)
    return len(data)
