"""Frequency schedule model.

A :class:`FrequencySchedule` is the single protocol-level output of the
encoder: an ordered run of constant tones and per-pixel frequency curves.
The live setpoint stream (:class:`LiveSchedule`) and the sample buffer
(``synth.synthesize``) are both projections of it.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence, Union

from .exceptions import InvalidParameter
from .modes import Channel


class ToneRole(enum.Enum):
    """What a constant tone is for."""
    LEADER = 'leader'
    HEADER = 'header'
    BREAK = 'break'
    VIS_START = 'vis_start'
    VIS_BIT = 'vis_bit'
    VIS_PARITY = 'vis_parity'
    VIS_STOP = 'vis_stop'
    SYNC = 'sync'
    BLANKING = 'blanking'


@dataclass(frozen=True)
class Tone:
    """Constant frequency held for ``duration`` seconds."""
    frequency: float
    duration: float
    role: ToneRole

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidParameter(f'Tone duration must not be negative: {self.duration}')


@dataclass(frozen=True)
class Curve:
    """Per-pixel frequencies laid evenly across ``duration`` seconds."""
    frequencies: tuple[float, ...]
    duration: float
    channel: Channel | None = None

    def __post_init__(self):
        object.__setattr__(self, 'frequencies', tuple(float(f) for f in self.frequencies))
        if not self.frequencies:
            raise InvalidParameter('Curve needs at least one frequency')
        if self.duration <= 0:
            raise InvalidParameter(f'Curve duration must be positive: {self.duration}')

    @property
    def step(self) -> float:
        """Duration of each frequency value."""
        return self.duration / len(self.frequencies)


Segment = Union[Tone, Curve]


@dataclass(frozen=True)
class FrequencySchedule:
    """Ordered tones and curves making up one transmission."""
    segments: tuple[Segment, ...]
    mode_name: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'segments', tuple(self.segments))

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def duration(self) -> float:
        """Exact total duration in seconds."""
        return math.fsum(seg.duration for seg in self.segments)

    def tones(self, role: ToneRole | None = None) -> list[Tone]:
        return [seg for seg in self.segments
                if isinstance(seg, Tone) and (role is None or seg.role == role)]

    def curves(self) -> list[Curve]:
        return [seg for seg in self.segments if isinstance(seg, Curve)]


# ---------------------------------------------------------------------------
# Live schedule projection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetValue:
    """Switch the oscillator to ``frequency`` at ``time``."""
    frequency: float
    time: float


@dataclass(frozen=True)
class SetValueCurve:
    """Sweep the oscillator through ``frequencies`` over ``duration``."""
    frequencies: tuple[float, ...]
    start_time: float
    duration: float


Setpoint = Union[SetValue, SetValueCurve]


@dataclass(frozen=True)
class LiveSchedule:
    """Timestamped setpoints plus the oscillator start/stop times."""
    setpoints: tuple[Setpoint, ...]
    start: float
    stop: float

    @property
    def duration(self) -> float:
        return self.stop - self.start


class Oscillator(Protocol):
    """Minimal interface of an external oscillator / audio scheduler."""

    def set_value_at_time(self, frequency: float, time: float) -> None: ...

    def set_value_curve_at_time(self, frequencies: Sequence[float],
                                start_time: float, duration: float) -> None: ...

    def start(self, time: float) -> None: ...

    def stop(self, time: float) -> None: ...


def to_live_schedule(schedule: FrequencySchedule, start_time: float = 0.0) -> LiveSchedule:
    """Project a schedule onto absolute setpoint timestamps.

    Args:
        schedule: Encoded schedule.
        start_time: Timestamp of the first setpoint (seconds).

    Returns:
        LiveSchedule with monotonically non-decreasing timestamps.
    """
    if start_time < 0 or not math.isfinite(start_time):
        raise InvalidParameter(f'Start time must be finite and non-negative: {start_time}')

    time = start_time
    setpoints: list[Setpoint] = []
    for seg in schedule.segments:
        if isinstance(seg, Tone):
            setpoints.append(SetValue(seg.frequency, time))
        else:
            setpoints.append(SetValueCurve(seg.frequencies, time, seg.duration))
        time += seg.duration

    return LiveSchedule(setpoints=tuple(setpoints), start=start_time, stop=time)


def drive_oscillator(oscillator: Oscillator, live: LiveSchedule) -> None:
    """Push every setpoint to an oscillator, then schedule start and stop."""
    for point in live.setpoints:
        if isinstance(point, SetValue):
            oscillator.set_value_at_time(point.frequency, point.time)
        else:
            oscillator.set_value_curve_at_time(point.frequencies, point.start_time,
                                               point.duration)
    oscillator.start(live.start)
    oscillator.stop(live.stop)
