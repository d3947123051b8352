"""SSTV (Slow-Scan Television) encoder package.

Converts RGBA pixel buffers into SSTV frequency schedules for Martin,
Scottie, PD and Wrasse modes, and renders them either as live oscillator
setpoints or as PCM/WAV audio using numpy.
"""

from .encoder import SSTVEncoder, encode_image
from .exceptions import (
    InputSizeMismatch,
    InvalidParameter,
    SSTVError,
    UnsupportedFormatOperation,
)
from .modes import (
    ALL_MODES,
    Family,
    FormatDescriptor,
    get_mode,
    get_mode_by_name,
    resolve_mode,
)
from .schedule import (
    Curve,
    FrequencySchedule,
    LiveSchedule,
    Tone,
    ToneRole,
    drive_oscillator,
    to_live_schedule,
)
from .synth import synthesize
from .wav import to_wav_bytes, write_wav

__all__ = [
    'ALL_MODES',
    'Curve',
    'Family',
    'FormatDescriptor',
    'FrequencySchedule',
    'InputSizeMismatch',
    'InvalidParameter',
    'LiveSchedule',
    'SSTVEncoder',
    'SSTVError',
    'Tone',
    'ToneRole',
    'UnsupportedFormatOperation',
    'drive_oscillator',
    'encode_image',
    'get_mode',
    'get_mode_by_name',
    'resolve_mode',
    'synthesize',
    'to_live_schedule',
    'to_wav_bytes',
    'write_wav',
]
