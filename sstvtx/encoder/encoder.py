"""SSTV image encoder.

Bundles preparation, scheduling and the two output backends behind one
object per mode. Every call builds its own prepared image and schedule, so
an encoder can be reused or shared freely.
"""

from __future__ import annotations

import numpy as np

from sstvtx.config import SAMPLE_RATE
from sstvtx.logging import get_logger

from .exceptions import InvalidParameter
from .modes import FormatDescriptor, resolve_mode
from .prepare import PreparedImage, prepare_image
from .schedule import (
    FrequencySchedule,
    LiveSchedule,
    Oscillator,
    drive_oscillator,
    to_live_schedule,
)
from .scheduler import build_schedule
from .synth import synthesize
from .wav import to_wav_bytes

logger = get_logger('sstvtx.encoder')


class SSTVEncoder:
    """Encode RGBA images for one SSTV mode.

    Usage::

        encoder = SSTVEncoder('Martin1')
        schedule = encoder.schedule(pixels)
        samples = encoder.samples(pixels, sample_rate=44100)
    """

    def __init__(self, mode: FormatDescriptor | str | int):
        self._mode = resolve_mode(mode)

    @property
    def mode(self) -> FormatDescriptor:
        return self._mode

    def prepare(self, pixels) -> PreparedImage:
        return prepare_image(self._mode, pixels)

    def schedule(self, pixels) -> FrequencySchedule:
        """Encode pixels into the full frequency schedule."""
        return build_schedule(self._mode, self.prepare(pixels))

    def live_schedule(self, pixels, start_time: float = 0.0) -> LiveSchedule:
        """Encode pixels into timestamped oscillator setpoints."""
        return to_live_schedule(self.schedule(pixels), start_time)

    def drive(self, oscillator: Oscillator, pixels, start_time: float = 0.0) -> LiveSchedule:
        """Schedule a transmission on an external oscillator.

        Returns:
            The LiveSchedule that was applied.
        """
        live = self.live_schedule(pixels, start_time)
        drive_oscillator(oscillator, live)
        logger.info(f'Scheduled {self._mode.name} on oscillator: '
                    f'{live.start:.3f}-{live.stop:.3f} s')
        return live

    def samples(self, pixels, sample_rate: float = SAMPLE_RATE,
                start_time: float = 0.0) -> np.ndarray:
        """Encode pixels into float32 PCM samples."""
        return synthesize(self.schedule(pixels), sample_rate, start_time)

    def wav(self, pixels, sample_rate: int = SAMPLE_RATE, channels: int = 1) -> bytes:
        """Encode pixels into a complete WAV file image.

        With ``channels`` > 1 the mono signal is duplicated on every channel.
        """
        if sample_rate <= 0 or int(sample_rate) != sample_rate:
            raise InvalidParameter(f'WAV sample rate must be a positive integer: {sample_rate}')
        if channels < 1:
            raise InvalidParameter(f'Channel count must be positive: {channels}')
        samples = self.samples(pixels, sample_rate)
        if channels > 1:
            samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
        data = to_wav_bytes(samples, sample_rate)
        logger.info(f'Encoded {self._mode.name}: {samples.shape[0] / sample_rate:.1f} s, '
                    f'{len(data)} bytes')
        return data


def encode_image(pixels, mode: FormatDescriptor | str | int) -> FrequencySchedule:
    """Encode pixels into a frequency schedule for ``mode``."""
    return SSTVEncoder(mode).schedule(pixels)
