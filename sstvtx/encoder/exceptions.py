"""Exceptions raised by the SSTV encoder."""

from __future__ import annotations


class SSTVError(Exception):
    """Base class for all encoder errors."""


class UnsupportedFormatOperation(SSTVError, NotImplementedError):
    """An operation needs a concrete format family the descriptor lacks."""


class InputSizeMismatch(SSTVError, ValueError):
    """Pixel buffer does not match the geometry of the format."""


class InvalidParameter(SSTVError, ValueError):
    """A numeric parameter, VIS code or mode name is invalid."""
