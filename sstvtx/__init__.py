"""
sstvtx - Slow-Scan Television transmit encoder.

Turns RGBA pixel buffers into SSTV frequency schedules, live oscillator
setpoints and PCM/WAV audio.
"""

__version__ = '0.1.0'
