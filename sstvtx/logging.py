"""Logging helpers for sstvtx."""

from __future__ import annotations

import logging
import sys

from sstvtx.config import LOG_FORMAT, LOG_LEVEL

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger('sstvtx')
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``sstvtx`` namespace.

    Args:
        name: Dotted logger name, e.g. 'sstvtx.encoder'. Names outside the
            namespace are prefixed with 'sstvtx.'.

    Returns:
        Configured logger.
    """
    _configure_root()
    if name != 'sstvtx' and not name.startswith('sstvtx.'):
        name = f'sstvtx.{name}'
    return logging.getLogger(name)
