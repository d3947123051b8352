"""Image loading for the encoder.

Turns image files or Pillow images into the RGBA pixel arrays the
encoder consumes, sized to a mode's geometry.
"""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from sstvtx.logging import get_logger

from .exceptions import InputSizeMismatch, InvalidParameter
from .modes import FormatDescriptor

logger = get_logger('sstvtx.encoder.imaging')

ImageSource = Union[str, os.PathLike, BinaryIO, bytes, Image.Image]


def open_image(source: ImageSource) -> Image.Image:
    """Open a path, file object, raw bytes or Pillow image.

    Raises:
        InvalidParameter: If the data is not a readable image.
    """
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        image = Image.open(source)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidParameter(f'Cannot read image: {e}') from e
    return image


def load_rgba(source: ImageSource, descriptor: FormatDescriptor,
              resize: bool = True) -> np.ndarray:
    """Load an image as a ``(lines, width, 4)`` uint8 RGBA array.

    Args:
        source: Image to load.
        descriptor: Mode whose geometry the image must match.
        resize: Scale the image to the mode size instead of rejecting it.

    Returns:
        RGBA array for :func:`~sstvtx.encoder.prepare.prepare_image`.

    Raises:
        InputSizeMismatch: If sizes differ and ``resize`` is False.
    """
    image = open_image(source).convert('RGBA')
    size = descriptor.image_size

    if image.size != size:
        if not resize:
            raise InputSizeMismatch(
                f'Image is {image.size[0]}x{image.size[1]}, '
                f'{descriptor.name} needs {size[0]}x{size[1]}')
        logger.info(f'Resizing image from {image.size[0]}x{image.size[1]} '
                    f'to {size[0]}x{size[1]} for {descriptor.name}')
        image = image.resize(size, Image.LANCZOS)

    return np.asarray(image, dtype=np.uint8)
