"""CGA color bar test pattern generator."""

import numpy as np

from .constants import NUM_COLORS, NATIVE_WIDTH
from .palette import indices_to_rgb


def generate_colorbar_indices(width=NATIVE_WIDTH, height=200):
    """Generate a CGA test pattern as a palette index raster.

    Top half: 16 vertical bars in palette order (0 left, 15 right).
    Bottom half: the same bars 1 pixel wide, alternating each bar color with
    black on odd columns, which produces strong artifact colors on a
    composite display.

    Returns:
        Index raster as numpy array (height x width, uint8).
    """
    indices = np.zeros((height, width), dtype=np.uint8)

    bar_width = width // NUM_COLORS
    bars = np.minimum(np.arange(width) // max(bar_width, 1), NUM_COLORS - 1)

    top = height // 2
    indices[:top] = bars
    dithered = bars.copy()
    dithered[1::2] = 0
    indices[top:] = dithered
    return indices


def generate_colorbars(width=NATIVE_WIDTH, height=200):
    """Generate the CGA test pattern as an RGBA frame (height x width x 4)."""
    rgb = indices_to_rgb(generate_colorbar_indices(width, height))
    frame = np.full((height, width, 4), 255, dtype=np.uint8)
    frame[..., :3] = rgb
    return frame
