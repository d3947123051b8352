"""Scan-line scheduling.

Lays out the image body of each format family: sync and blanking tones
interleaved with one frequency curve per prepared channel track.
"""

from __future__ import annotations

import numpy as np

from sstvtx.logging import get_logger

from .constants import FREQ_BLANKING, FREQ_SYNC
from .exceptions import InputSizeMismatch, UnsupportedFormatOperation
from .header import encode_header, encode_prefix
from .modes import Family, FormatDescriptor
from .prepare import PreparedImage
from .schedule import Curve, FrequencySchedule, Segment, Tone, ToneRole

logger = get_logger('sstvtx.encoder.scheduler')


class _LineWriter:
    """Collects body segments for one descriptor."""

    def __init__(self, descriptor: FormatDescriptor, prepared: PreparedImage):
        self.descriptor = descriptor
        self.prepared = prepared
        self.channels = descriptor.layout.channel_order
        self.segments: list[Segment] = []

    def sync(self) -> None:
        self.segments.append(
            Tone(FREQ_SYNC, self.descriptor.sync_pulse_length, ToneRole.SYNC))

    def blank(self) -> None:
        self.segments.append(
            Tone(FREQ_BLANKING, self.descriptor.blanking_interval, ToneRole.BLANKING))

    def track(self, line: int, channel: int) -> None:
        self.segments.append(Curve(
            frequencies=self.prepared[line, channel].tolist(),
            duration=self.descriptor.scan_line_length,
            channel=self.channels[channel],
        ))


def _martin(w: _LineWriter) -> None:
    for line in range(w.descriptor.num_scan_lines):
        w.sync()
        w.blank()
        for channel in range(3):
            w.track(line, channel)
            w.blank()


def _scottie(w: _LineWriter) -> None:
    # Single leading sync; afterwards sync only precedes the red track
    w.sync()
    for line in range(w.descriptor.num_scan_lines):
        for channel in range(3):
            if channel == 2:
                w.sync()
            w.blank()
            w.track(line, channel)


def _pd(w: _LineWriter) -> None:
    for line in range(0, w.descriptor.num_scan_lines, 2):
        w.sync()
        w.blank()
        w.track(line, 0)
        w.track(line, 1)
        w.track(line, 2)
        w.track(line + 1, 0)


def _wrasse(w: _LineWriter) -> None:
    for line in range(w.descriptor.num_scan_lines):
        w.sync()
        w.blank()
        for channel in range(3):
            w.track(line, channel)


_BODY_WRITERS = {
    Family.MARTIN: _martin,
    Family.SCOTTIE: _scottie,
    Family.PD: _pd,
    Family.WRASSE: _wrasse,
}


def encode_body(descriptor: FormatDescriptor, prepared: PreparedImage) -> list[Segment]:
    """Image body segments for a prepared image.

    Raises:
        UnsupportedFormatOperation: If the descriptor has no family.
        InputSizeMismatch: If ``prepared`` does not fit the descriptor.
    """
    writer_fn = _BODY_WRITERS.get(descriptor.family)
    if writer_fn is None:
        raise UnsupportedFormatOperation(
            f'{descriptor.name} has no format family; cannot schedule scan lines')

    prepared = np.asarray(prepared)
    expected = (descriptor.num_scan_lines, len(descriptor.layout.channel_order),
                descriptor.vert_resolution)
    if prepared.shape != expected:
        raise InputSizeMismatch(
            f'{descriptor.name} needs prepared shape {expected}, got {prepared.shape}')

    writer = _LineWriter(descriptor, prepared)
    writer_fn(writer)
    return writer.segments


def build_schedule(descriptor: FormatDescriptor, prepared: PreparedImage) -> FrequencySchedule:
    """Full transmission: leader prefix, VIS header and image body."""
    body = encode_body(descriptor, prepared)
    segments = [*encode_prefix(), *encode_header(descriptor), *body]
    schedule = FrequencySchedule(segments=tuple(segments), mode_name=descriptor.name)

    logger.debug(f'Scheduled {descriptor.name}: {len(schedule)} segments, '
                 f'{schedule.duration:.3f} s')
    return schedule
