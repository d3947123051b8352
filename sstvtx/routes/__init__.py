"""HTTP routes for sstvtx."""

from .sstv import sstv_bp

__all__ = ['sstv_bp']
