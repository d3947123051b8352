"""Pixel-to-frequency color encoding.

Scalar functions read one pixel from a flat RGBA buffer; the ``*_array``
variants apply the same mapping to a whole ``(..., 4)`` numpy array.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .constants import (
    BY_COEFFS,
    CHROMA_OFFSET,
    COLOR_FREQ_MULT,
    FREQ_BLACK,
    GREY_WEIGHTS,
    LUMA_OFFSET,
    RY_COEFFS,
    SAMPLES_PER_PIXEL,
    Y_COEFFS,
    YUV_SCALE,
)
from .exceptions import InputSizeMismatch


def value_to_freq(value):
    """Map an 8-bit sample (or array of them) to a frequency in Hz."""
    return value * COLOR_FREQ_MULT + FREQ_BLACK


def _pixel(data: Sequence[int], scan_line: int, vert_pos: int,
           vert_resolution: int) -> tuple[float, float, float]:
    if scan_line < 0 or not 0 <= vert_pos < vert_resolution:
        raise InputSizeMismatch(
            f'Pixel ({vert_pos}, {scan_line}) outside a {vert_resolution}-wide image')
    index = scan_line * (vert_resolution * SAMPLES_PER_PIXEL) + vert_pos * SAMPLES_PER_PIXEL
    if index + 2 >= len(data):
        raise InputSizeMismatch(
            f'Pixel ({vert_pos}, {scan_line}) needs index {index + 2}, '
            f'buffer has {len(data)} samples')
    return float(data[index]), float(data[index + 1]), float(data[index + 2])


def greyscale_freq(data: Sequence[int], scan_line: int, vert_pos: int,
                   vert_resolution: int) -> float:
    """Frequency of a pixel's weighted grey level.

    Args:
        data: Flat RGBA buffer.
        scan_line: Row index.
        vert_pos: Column index.
        vert_resolution: Pixels per row.

    Returns:
        Frequency in Hz.
    """
    red, green, blue = _pixel(data, scan_line, vert_pos, vert_resolution)
    wr, wg, wb = GREY_WEIGHTS
    return value_to_freq(red * wr + green * wg + blue * wb)


def rgb_freqs(data: Sequence[int], scan_line: int, vert_pos: int,
              vert_resolution: int) -> tuple[float, float, float]:
    """(red, green, blue) frequencies of a pixel."""
    red, green, blue = _pixel(data, scan_line, vert_pos, vert_resolution)
    return value_to_freq(red), value_to_freq(green), value_to_freq(blue)


def _yryby(red, green, blue):
    y = LUMA_OFFSET + YUV_SCALE * (
        Y_COEFFS[0] * red + Y_COEFFS[1] * green + Y_COEFFS[2] * blue)
    ry = CHROMA_OFFSET + YUV_SCALE * (
        RY_COEFFS[0] * red + RY_COEFFS[1] * green + RY_COEFFS[2] * blue)
    by = CHROMA_OFFSET + YUV_SCALE * (
        BY_COEFFS[0] * red + BY_COEFFS[1] * green + BY_COEFFS[2] * blue)
    return y, ry, by


def yryby_freqs(data: Sequence[int], scan_line: int, vert_pos: int,
                vert_resolution: int) -> tuple[float, float, float]:
    """(Y, R-Y, B-Y) frequencies of a pixel."""
    y, ry, by = _yryby(*_pixel(data, scan_line, vert_pos, vert_resolution))
    return value_to_freq(y), value_to_freq(ry), value_to_freq(by)


# ---------------------------------------------------------------------------
# Vectorized variants
# ---------------------------------------------------------------------------

def _split(pixels: np.ndarray):
    rgb = pixels[..., :3].astype(np.float64)
    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


def greyscale_array(pixels: np.ndarray) -> np.ndarray:
    """Greyscale frequencies for an RGBA array, shape ``pixels.shape[:-1]``."""
    red, green, blue = _split(pixels)
    wr, wg, wb = GREY_WEIGHTS
    return value_to_freq(red * wr + green * wg + blue * wb)


def rgb_array(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """(red, green, blue) frequency planes for an RGBA array."""
    red, green, blue = _split(pixels)
    return value_to_freq(red), value_to_freq(green), value_to_freq(blue)


def yryby_array(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """(Y, R-Y, B-Y) frequency planes for an RGBA array."""
    y, ry, by = _yryby(*_split(pixels))
    return value_to_freq(y), value_to_freq(ry), value_to_freq(by)
