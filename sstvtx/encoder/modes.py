"""SSTV mode specifications.

Dataclass definitions for each supported transmit mode: geometry, line
timing, VIS code, and the family layout that decides color model and
channel order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .constants import VIS_CODE_BITS
from .exceptions import InvalidParameter


class Family(enum.Enum):
    """SSTV format families with distinct scan-line layouts."""
    MARTIN = 'martin'
    SCOTTIE = 'scottie'
    PD = 'pd'
    WRASSE = 'wrasse'


class ColorModel(enum.Enum):
    """Pixel-to-frequency models."""
    RGB = 'rgb'          # Direct R, G, B channels
    YRYBY = 'yryby'      # Luminance + R-Y / B-Y color difference


class Channel(enum.Enum):
    """A single color track within a prepared scan line."""
    RED = 'red'
    GREEN = 'green'
    BLUE = 'blue'
    Y = 'y'
    RY = 'r-y'
    BY = 'b-y'


@dataclass(frozen=True)
class FamilyLayout:
    """Per-family strategy values.

    Attributes:
        color_model: How pixels become frequencies.
        channel_order: Channel tracks of each prepared line, in transmit order.
        lines_per_sync: Scan lines sent per sync pulse (2 for PD pairs).
        averages_chroma: Whether R-Y/B-Y are averaged across line pairs.
    """
    color_model: ColorModel
    channel_order: tuple[Channel, ...]
    lines_per_sync: int = 1
    averages_chroma: bool = False


FAMILY_LAYOUTS: dict[Family, FamilyLayout] = {
    Family.MARTIN: FamilyLayout(
        color_model=ColorModel.RGB,
        channel_order=(Channel.GREEN, Channel.BLUE, Channel.RED),
    ),
    Family.SCOTTIE: FamilyLayout(
        color_model=ColorModel.RGB,
        channel_order=(Channel.GREEN, Channel.BLUE, Channel.RED),
    ),
    Family.PD: FamilyLayout(
        color_model=ColorModel.YRYBY,
        channel_order=(Channel.Y, Channel.RY, Channel.BY),
        lines_per_sync=2,
        averages_chroma=True,
    ),
    Family.WRASSE: FamilyLayout(
        color_model=ColorModel.RGB,
        channel_order=(Channel.RED, Channel.GREEN, Channel.BLUE),
    ),
}


def vis_bits(value: int) -> tuple[bool, ...]:
    """Convert a VIS value (0-127) to its 7 bits, MSB first."""
    if not 0 <= value < (1 << VIS_CODE_BITS):
        raise InvalidParameter(f'VIS value out of range: {value}')
    return tuple(bool((value >> shift) & 1)
                 for shift in range(VIS_CODE_BITS - 1, -1, -1))


def vis_value(bits) -> int:
    """Convert 7 MSB-first bits back to the VIS value."""
    value = 0
    for bit in bits:
        value = (value << 1) | int(bool(bit))
    return value


@dataclass(frozen=True)
class FormatDescriptor:
    """Complete specification of an SSTV transmit mode.

    Attributes:
        name: Human-readable mode name (e.g. 'Martin1').
        family: Layout family, or None for a geometry-only descriptor.
        num_scan_lines: Image height in lines.
        vert_resolution: Pixels per scan line (image width).
        blanking_interval: Blanking pulse duration (s).
        scan_line_length: Duration of one channel track (s).
        sync_pulse_length: Sync pulse duration (s).
        vis_code: 7 VIS bits, most significant first.
    """
    name: str
    family: Family | None
    num_scan_lines: int
    vert_resolution: int
    blanking_interval: float
    scan_line_length: float
    sync_pulse_length: float
    vis_code: tuple[bool, ...]

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, 'vis_code', tuple(bool(b) for b in self.vis_code))

        if len(self.vis_code) != VIS_CODE_BITS:
            raise InvalidParameter(
                f'{self.name}: VIS code must have {VIS_CODE_BITS} bits, '
                f'got {len(self.vis_code)}')
        if self.num_scan_lines <= 0 or self.vert_resolution <= 0:
            raise InvalidParameter(
                f'{self.name}: geometry must be positive '
                f'({self.vert_resolution}x{self.num_scan_lines})')
        if self.scan_line_length <= 0:
            raise InvalidParameter(
                f'{self.name}: scan line length must be positive')
        if self.blanking_interval < 0 or self.sync_pulse_length < 0:
            raise InvalidParameter(
                f'{self.name}: pulse lengths must not be negative')

        layout = FAMILY_LAYOUTS.get(self.family) if self.family else None
        if layout and self.num_scan_lines % layout.lines_per_sync:
            raise InvalidParameter(
                f'{self.name}: {self.family.value} needs a line count '
                f'divisible by {layout.lines_per_sync}')

    @property
    def vis_value(self) -> int:
        return vis_value(self.vis_code)

    @property
    def image_size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.vert_resolution, self.num_scan_lines

    @property
    def layout(self) -> FamilyLayout | None:
        return FAMILY_LAYOUTS.get(self.family) if self.family else None

    @property
    def nominal_duration(self) -> float:
        """Coarse image body duration in seconds.

        This is an estimate only; it ignores PD line pairing and the
        per-family pulse placement. Use ``FrequencySchedule.duration`` for
        the exact length.
        """
        return self.num_scan_lines * (
            self.scan_line_length + self.blanking_interval
            + self.sync_pulse_length * 3)


# ---------------------------------------------------------------------------
# Martin family
# ---------------------------------------------------------------------------

MARTIN_1 = FormatDescriptor(
    name='Martin1',
    family=Family.MARTIN,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.000572,
    scan_line_length=0.146432,
    sync_pulse_length=0.004862,
    vis_code=(False, True, False, True, True, False, False),
)

MARTIN_2 = FormatDescriptor(
    name='Martin2',
    family=Family.MARTIN,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.000572,
    scan_line_length=0.073216,
    sync_pulse_length=0.004862,
    vis_code=(False, True, False, True, False, False, False),
)

# ---------------------------------------------------------------------------
# Scottie family
# ---------------------------------------------------------------------------

SCOTTIE_1 = FormatDescriptor(
    name='Scottie1',
    family=Family.SCOTTIE,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.0015,
    scan_line_length=0.138240,
    sync_pulse_length=0.009,
    vis_code=(False, True, True, True, True, False, False),
)

SCOTTIE_2 = FormatDescriptor(
    name='Scottie2',
    family=Family.SCOTTIE,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.0015,
    scan_line_length=0.088064,
    sync_pulse_length=0.009,
    vis_code=(False, True, True, True, False, False, False),
)

SCOTTIE_DX = FormatDescriptor(
    name='ScottieDX',
    family=Family.SCOTTIE,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.0015,
    scan_line_length=0.3456,
    sync_pulse_length=0.009,
    vis_code=(True, False, False, True, True, False, False),
)

# ---------------------------------------------------------------------------
# PD family
# ---------------------------------------------------------------------------

PD_50 = FormatDescriptor(
    name='PD50',
    family=Family.PD,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.00208,
    scan_line_length=0.091520,
    sync_pulse_length=0.02,
    vis_code=(True, False, True, True, True, False, True),
)

PD_90 = FormatDescriptor(
    name='PD90',
    family=Family.PD,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.00208,
    scan_line_length=0.170240,
    sync_pulse_length=0.02,
    vis_code=(True, True, False, False, False, True, True),
)

PD_120 = FormatDescriptor(
    name='PD120',
    family=Family.PD,
    num_scan_lines=496,
    vert_resolution=640,
    blanking_interval=0.00208,
    scan_line_length=0.121600,
    sync_pulse_length=0.02,
    vis_code=(True, False, True, True, True, True, True),
)

PD_160 = FormatDescriptor(
    name='PD160',
    family=Family.PD,
    num_scan_lines=400,
    vert_resolution=512,
    blanking_interval=0.00208,
    scan_line_length=0.195584,
    sync_pulse_length=0.02,
    vis_code=(True, True, False, False, True, False, False),
)

PD_180 = FormatDescriptor(
    name='PD180',
    family=Family.PD,
    num_scan_lines=496,
    vert_resolution=640,
    blanking_interval=0.00208,
    scan_line_length=0.18304,
    sync_pulse_length=0.02,
    vis_code=(True, True, False, False, False, False, False),
)

PD_240 = FormatDescriptor(
    name='PD240',
    family=Family.PD,
    num_scan_lines=496,
    vert_resolution=640,
    blanking_interval=0.00208,
    scan_line_length=0.24448,
    sync_pulse_length=0.02,
    vis_code=(True, True, False, False, False, False, True),
)

PD_290 = FormatDescriptor(
    name='PD290',
    family=Family.PD,
    num_scan_lines=616,
    vert_resolution=800,
    blanking_interval=0.00208,
    scan_line_length=0.2288,
    sync_pulse_length=0.02,
    vis_code=(True, False, True, True, True, True, False),
)

# ---------------------------------------------------------------------------
# Wrasse family
# ---------------------------------------------------------------------------

WRASSE_SC2_180 = FormatDescriptor(
    name='WrasseSC2-180',
    family=Family.WRASSE,
    num_scan_lines=256,
    vert_resolution=320,
    blanking_interval=0.0005,
    scan_line_length=0.235,
    sync_pulse_length=0.0055225,
    vis_code=(False, True, True, False, True, True, True),
)


# ---------------------------------------------------------------------------
# Mode registry
# ---------------------------------------------------------------------------

ALL_MODES: dict[int, FormatDescriptor] = {
    m.vis_value: m for m in [
        MARTIN_1, MARTIN_2,
        SCOTTIE_1, SCOTTIE_2, SCOTTIE_DX,
        PD_50, PD_90, PD_120, PD_160, PD_180, PD_240, PD_290,
        WRASSE_SC2_180,
    ]
}

MODE_BY_NAME: dict[str, FormatDescriptor] = {m.name: m for m in ALL_MODES.values()}

# Short names used by other SSTV software
MODE_ALIASES: dict[str, str] = {
    'M1': 'Martin1',
    'M2': 'Martin2',
    'S1': 'Scottie1',
    'S2': 'Scottie2',
    'DX': 'ScottieDX',
    'SDX': 'ScottieDX',
    'SC2-180': 'WrasseSC2-180',
    'SC2180': 'WrasseSC2-180',
}

_NAME_LOOKUP: dict[str, FormatDescriptor] = {
    **{name.lower(): mode for name, mode in MODE_BY_NAME.items()},
    **{alias.lower(): MODE_BY_NAME[name] for alias, name in MODE_ALIASES.items()},
}


def get_mode(vis_code: int) -> FormatDescriptor | None:
    """Look up a mode by its VIS value."""
    return ALL_MODES.get(vis_code)


def get_mode_by_name(name: str) -> FormatDescriptor | None:
    """Look up a mode by name or alias, case-insensitively."""
    return _NAME_LOOKUP.get(name.strip().lower())


def resolve_mode(mode: FormatDescriptor | str | int) -> FormatDescriptor:
    """Resolve a descriptor, a mode name/alias or a VIS value.

    Raises:
        InvalidParameter: If the mode is unknown.
    """
    if isinstance(mode, FormatDescriptor):
        return mode
    if isinstance(mode, bool):
        raise InvalidParameter(f'Unknown SSTV mode: {mode!r}')
    if isinstance(mode, int):
        found = get_mode(mode)
    elif isinstance(mode, str):
        found = get_mode_by_name(mode)
    else:
        found = None
    if found is None:
        raise InvalidParameter(f'Unknown SSTV mode: {mode!r}')
    return found
