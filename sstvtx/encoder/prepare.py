"""Image preparation.

Walks an RGBA pixel buffer and produces the per-line, per-channel frequency
tracks a format family transmits. The result is a new read-only array on
every call; nothing is cached on the descriptor.
"""

from __future__ import annotations

import numpy as np

from sstvtx.logging import get_logger

from .color import rgb_array, yryby_array
from .constants import SAMPLES_PER_PIXEL
from .exceptions import InputSizeMismatch, UnsupportedFormatOperation
from .modes import Channel, ColorModel, FamilyLayout, FormatDescriptor

logger = get_logger('sstvtx.encoder.prepare')

# Shape (num_scan_lines, channels, vert_resolution), frequencies in Hz
PreparedImage = np.ndarray


def as_pixel_array(pixels, descriptor: FormatDescriptor) -> np.ndarray:
    """Validate a pixel buffer and view it as ``(lines, width, 4)``.

    Args:
        pixels: Flat RGBA samples (bytes, sequence or 1-D array) or an
            array already shaped ``(lines, width, 4)``.
        descriptor: Target format.

    Returns:
        Array of shape ``(num_scan_lines, vert_resolution, 4)``.

    Raises:
        InputSizeMismatch: If the buffer does not match the format geometry.
    """
    width, height = descriptor.image_size

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        array = np.frombuffer(pixels, dtype=np.uint8)
    else:
        array = np.asarray(pixels)

    if array.ndim == 3:
        if array.shape != (height, width, SAMPLES_PER_PIXEL):
            raise InputSizeMismatch(
                f'{descriptor.name} needs a {height}x{width}x{SAMPLES_PER_PIXEL} '
                f'pixel array, got {"x".join(str(d) for d in array.shape)}')
        return array

    expected = height * width * SAMPLES_PER_PIXEL
    if array.ndim != 1 or array.size != expected:
        raise InputSizeMismatch(
            f'{descriptor.name} needs {expected} RGBA samples '
            f'({width}x{height}), got {array.size}')
    return array.reshape(height, width, SAMPLES_PER_PIXEL)


def _require_layout(descriptor: FormatDescriptor) -> FamilyLayout:
    layout = descriptor.layout
    if layout is None:
        raise UnsupportedFormatOperation(
            f'{descriptor.name} has no format family; cannot encode image data')
    return layout


def _average_pairs(plane: np.ndarray) -> np.ndarray:
    """Average each pair of rows and give both rows the result."""
    lines, width = plane.shape
    averaged = plane.reshape(lines // 2, 2, width).mean(axis=1)
    return np.repeat(averaged, 2, axis=0)


def prepare_image(descriptor: FormatDescriptor, pixels) -> PreparedImage:
    """Convert a pixel buffer into frequency tracks for a format.

    For PD-style layouts, the R-Y and B-Y tracks of each line pair are
    replaced by their pair average, so both lines of a pair carry the same
    chroma.

    Args:
        descriptor: Target format.
        pixels: RGBA buffer accepted by :func:`as_pixel_array`.

    Returns:
        Read-only array of shape (lines, channels, width).
    """
    layout = _require_layout(descriptor)
    array = as_pixel_array(pixels, descriptor)

    if layout.color_model == ColorModel.RGB:
        red, green, blue = rgb_array(array)
        planes = {Channel.RED: red, Channel.GREEN: green, Channel.BLUE: blue}
    else:
        y, ry, by = yryby_array(array)
        if layout.averages_chroma:
            ry = _average_pairs(ry)
            by = _average_pairs(by)
        planes = {Channel.Y: y, Channel.RY: ry, Channel.BY: by}

    prepared = np.stack([planes[ch] for ch in layout.channel_order], axis=1)
    prepared.setflags(write=False)

    logger.debug(f'Prepared {descriptor.name}: {prepared.shape[0]} lines, '
                 f'{prepared.shape[1]} channels')
    return prepared
