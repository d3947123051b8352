"""SSTV transmit protocol constants.

Tone frequencies and timings for the leader, the VIS header and the
per-line sync/blanking pulses, plus the pixel-to-frequency mapping.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Tone frequencies (Hz)
# ---------------------------------------------------------------------------
FREQ_VIS_BIT_1 = 1100      # VIS logic 1
FREQ_SYNC = 1200            # Horizontal sync pulse, VIS start/stop bits
FREQ_VIS_BIT_0 = 1300       # VIS logic 0
FREQ_BREAK = 1200           # Break tone between header leaders
FREQ_LEADER = 1900          # Header leader / calibration tone
FREQ_BLANKING = 1500        # Blanking (porch) between channels
FREQ_BLACK = 1500           # Pixel value 0
FREQ_WHITE = 2300           # Pixel value 255

# Leader prefix sent before the VIS header
PREFIX_FREQS = (1900, 1500, 1900, 1500, 2300, 1500, 2300, 1500)

# ---------------------------------------------------------------------------
# Header timing (seconds)
# ---------------------------------------------------------------------------
PREFIX_PULSE_LENGTH = 0.1   # each prefix tone
HEADER_PULSE_LENGTH = 0.3   # each 1900 Hz leader
HEADER_BREAK_LENGTH = 0.01  # break between leaders
VIS_BIT_LENGTH = 0.03       # start, data, parity and stop bits

VIS_CODE_BITS = 7

# ---------------------------------------------------------------------------
# Pixel mapping
# ---------------------------------------------------------------------------
# Hz per 8-bit sample step, (2300 - 1500) / 255
COLOR_FREQ_MULT = 3.1372549

# Greyscale weights
GREY_WEIGHTS = (0.299, 0.587, 0.114)

# Y / R-Y / B-Y conversion (offset, scale, R, G, B)
LUMA_OFFSET = 6.0
CHROMA_OFFSET = 128.0
YUV_SCALE = 0.003906
Y_COEFFS = (65.738, 129.057, 25.064)
RY_COEFFS = (112.439, -94.154, -18.285)
BY_COEFFS = (-37.945, -74.494, 112.439)

# Samples per pixel in the input buffer (R, G, B, A)
SAMPLES_PER_PIXEL = 4
