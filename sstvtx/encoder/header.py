"""Leader prefix and VIS header encoding."""

from __future__ import annotations

from typing import Sequence

from .constants import (
    FREQ_BREAK,
    FREQ_LEADER,
    FREQ_SYNC,
    FREQ_VIS_BIT_0,
    FREQ_VIS_BIT_1,
    HEADER_BREAK_LENGTH,
    HEADER_PULSE_LENGTH,
    PREFIX_FREQS,
    PREFIX_PULSE_LENGTH,
    VIS_BIT_LENGTH,
    VIS_CODE_BITS,
)
from .exceptions import InvalidParameter
from .modes import FormatDescriptor
from .schedule import Tone, ToneRole


def parity_bit(bits: Sequence[bool]) -> bool:
    """Even parity: True when the count of set bits is odd."""
    return sum(1 for bit in bits if bit) % 2 == 1


def _bit_freq(bit: bool) -> int:
    return FREQ_VIS_BIT_1 if bit else FREQ_VIS_BIT_0


def encode_prefix() -> list[Tone]:
    """The eight 100 ms leader tones."""
    return [Tone(freq, PREFIX_PULSE_LENGTH, ToneRole.LEADER) for freq in PREFIX_FREQS]


def encode_vis(vis_code: Sequence[bool]) -> list[Tone]:
    """VIS start bit, 7 data bits LSB first, parity bit and stop bit.

    ``vis_code`` is MSB first, as stored on the descriptor. It is only
    read, never reordered in place.
    """
    if len(vis_code) != VIS_CODE_BITS:
        raise InvalidParameter(
            f'VIS code must have {VIS_CODE_BITS} bits, got {len(vis_code)}')

    tones = [Tone(FREQ_SYNC, VIS_BIT_LENGTH, ToneRole.VIS_START)]
    for bit in reversed(tuple(vis_code)):
        tones.append(Tone(_bit_freq(bit), VIS_BIT_LENGTH, ToneRole.VIS_BIT))
    tones.append(Tone(_bit_freq(parity_bit(vis_code)), VIS_BIT_LENGTH, ToneRole.VIS_PARITY))
    tones.append(Tone(FREQ_SYNC, VIS_BIT_LENGTH, ToneRole.VIS_STOP))
    return tones


def encode_header(descriptor: FormatDescriptor) -> list[Tone]:
    """Leader/break/leader calibration header followed by the VIS code."""
    tones = [
        Tone(FREQ_LEADER, HEADER_PULSE_LENGTH, ToneRole.HEADER),
        Tone(FREQ_BREAK, HEADER_BREAK_LENGTH, ToneRole.BREAK),
        Tone(FREQ_LEADER, HEADER_PULSE_LENGTH, ToneRole.HEADER),
    ]
    tones.extend(encode_vis(descriptor.vis_code))
    return tones
