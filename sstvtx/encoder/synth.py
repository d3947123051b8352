"""Sample synthesis.

Renders a frequency schedule into a fixed-rate PCM buffer. Each sample is
``sin(2*pi*f*t)`` with ``t`` taken from the absolute sample index, so the
time reference runs continuously across segment boundaries.
"""

from __future__ import annotations

import math

import numpy as np

from sstvtx.logging import get_logger

from .exceptions import InvalidParameter
from .schedule import Curve, FrequencySchedule

logger = get_logger('sstvtx.encoder.synth')


def _check_sample_rate(sample_rate: float) -> None:
    if not sample_rate > 0 or not math.isfinite(sample_rate):
        raise InvalidParameter(f'Sample rate must be positive: {sample_rate}')


def buffer_length(schedule: FrequencySchedule, sample_rate: float) -> int:
    """Number of samples a schedule renders to: floor(duration * rate)."""
    _check_sample_rate(sample_rate)
    return math.floor(schedule.duration * sample_rate)


def frequency_track(schedule: FrequencySchedule, sample_rate: float) -> np.ndarray:
    """Instantaneous frequency of every sample, in Hz.

    A tone of duration ``d`` covers ``floor(d * rate)`` samples; each value
    of a ``k``-point curve covers ``floor(d / k * rate)`` samples. The track
    is cut or zero-padded to :func:`buffer_length`.

    Args:
        schedule: Encoded schedule.
        sample_rate: Output sample rate (Hz).

    Returns:
        Float64 array of length ``buffer_length(schedule, sample_rate)``.
    """
    total = buffer_length(schedule, sample_rate)

    pieces = []
    for seg in schedule.segments:
        if isinstance(seg, Curve):
            count = math.floor(seg.step * sample_rate)
            if count:
                pieces.append(np.repeat(np.asarray(seg.frequencies, dtype=np.float64), count))
        else:
            count = math.floor(seg.duration * sample_rate)
            if count:
                pieces.append(np.full(count, seg.frequency, dtype=np.float64))

    track = np.concatenate(pieces) if pieces else np.zeros(0, dtype=np.float64)
    if track.size >= total:
        return track[:total]

    padded = np.zeros(total, dtype=np.float64)
    padded[:track.size] = track
    return padded


def synthesize(schedule: FrequencySchedule, sample_rate: float = 44100,
               start_time: float = 0.0) -> np.ndarray:
    """Render a schedule to float32 samples in [-1, 1].

    Args:
        schedule: Encoded schedule.
        sample_rate: Output sample rate (Hz).
        start_time: Offset added to every sample time (seconds).

    Returns:
        Float32 array of length ``floor(schedule.duration * sample_rate)``.
    """
    if start_time < 0 or not math.isfinite(start_time):
        raise InvalidParameter(f'Start time must not be negative: {start_time}')

    freqs = frequency_track(schedule, sample_rate)
    t = start_time + np.arange(freqs.size, dtype=np.float64) / sample_rate
    samples = np.sin(2.0 * np.pi * freqs * t).astype(np.float32)

    logger.debug(f'Synthesized {samples.size} samples at {sample_rate} Hz '
                 f'for {schedule.mode_name or "schedule"}')
    return samples
