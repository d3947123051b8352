"""
Runtime configuration for sstvtx.

Values are read once from ``SSTVTX_*`` environment variables at import time.
"""

from __future__ import annotations

import os

ENV_PREFIX = 'SSTVTX_'


def _get_env(key: str, default: str) -> str:
    """Get an environment variable with the package prefix."""
    return os.environ.get(f'{ENV_PREFIX}{key}', default)


def _get_env_int(key: str, default: int) -> int:
    """Get an integer environment variable, falling back on bad values."""
    try:
        return int(_get_env(key, str(default)))
    except ValueError:
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get a boolean environment variable."""
    value = _get_env(key, '').strip().lower()
    if not value:
        return default
    return value in ('1', 'true', 'yes', 'on')


# Audio output
SAMPLE_RATE = _get_env_int('SAMPLE_RATE', 44100)
WAV_CHANNELS = _get_env_int('WAV_CHANNELS', 1)

# Encoding
DEFAULT_MODE = _get_env('DEFAULT_MODE', 'Martin1')
RESIZE_INPUT = _get_env_bool('RESIZE_INPUT', True)

# HTTP uploads
MAX_UPLOAD_MB = _get_env_int('MAX_UPLOAD_MB', 16)

# Logging
LOG_LEVEL = _get_env('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
