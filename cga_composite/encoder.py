"""CGA composite encoder: 16-color index raster -> double-width luma signal."""

import logging
import time

import numpy as np

from .constants import (
    COLOR_GEN_HALF, COLOR_GEN_HALF_INT, COLOR_GEN_EDGES_HALF,
    NUM_HUES, HALF_DOTS_PER_CYCLE, PIXELS_PER_CYCLE,
    EDGE_RESPONSE, LUMA_ATTENUATE, INTENSITY_GAIN, INTENSITY_GAIN_INT,
    LUMA_ATTENUATE_MUL, LUMA_ATTENUATE_SHIFT,
)
from .palette import quantize_frame

logger = logging.getLogger(__name__)

_F = np.float32


def get_cycle_hdot(x):
    """Return the position (0-3) of pixel column x within a color cycle."""
    return np.abs(np.asarray(x) % PIXELS_PER_CYCLE)


def half_dot_waveform(indices, table, maximum):
    """Look up both half-dot waveform samples for every pixel.

    Args:
        indices: CGA index raster (H x W).
        table: Waveform table, COLOR_GEN_HALF or COLOR_GEN_HALF_INT.
        maximum: Peak value of the table (1.0 or 255).

    Returns:
        Tuple of (values, attenuate), both (H x W x 2). ``attenuate`` marks
        half-dots that sit on a rising or falling color clock edge.
    """
    idx = np.asarray(indices, dtype=np.intp)
    w = idx.shape[1]
    base = idx % NUM_HUES

    # Right-hand neighbour's hue; black past the last column
    next_base = np.zeros_like(base)
    next_base[:, :-1] = base[:, 1:]

    phase0 = (get_cycle_hdot(np.arange(w)) * 2).reshape(1, -1)
    phase1 = phase0 + 1

    v0 = table[base, phase0]
    v1 = table[base, phase1]
    # Second half-dot crosses into the next pixel's waveform
    after1 = table[next_base, (phase1 + 1) % HALF_DOTS_PER_CYCLE]

    # The previous half-dot restarts at zero for every pixel, so a lit first
    # half-dot always counts as rising.
    attenuate0 = COLOR_GEN_EDGES_HALF[base, phase0] & (v0 == maximum)
    attenuate1 = (COLOR_GEN_EDGES_HALF[base, phase1] & (v1 == maximum)
                  & ((v0 == 0) | (after1 == 0)))

    values = np.stack([v0, v1], axis=-1)
    attenuate = np.stack([attenuate0, attenuate1], axis=-1)
    return values, attenuate


def _bright_mask(indices):
    return (np.asarray(indices) > 7)[..., np.newaxis]


def encode_indices_float(indices):
    """Floating-point composite encoder (reference path).

    Applies edge slew attenuation, overall luma attenuation and intensity
    gain in [0, 1], then truncates to 8 bits.
    """
    values, attenuate = half_dot_waveform(indices, COLOR_GEN_HALF, 1.0)
    values = np.where(attenuate, values * _F(EDGE_RESPONSE), values)
    values = values * _F(LUMA_ATTENUATE)
    values = values + np.where(_bright_mask(indices), _F(INTENSITY_GAIN), _F(0.0))

    signal = np.clip(values * _F(255.0), 0, 255).astype(np.uint8)
    h, w = signal.shape[:2]
    return signal.reshape(h, w * 2)


def encode_indices_int(indices):
    """Fixed-point composite encoder (default path).

    Edge slew attenuation is not applied on this path; only the 0.75 luma
    attenuation and the intensity gain are.
    """
    values, _ = half_dot_waveform(indices, COLOR_GEN_HALF_INT, 255)
    values = (values.astype(np.uint32) * LUMA_ATTENUATE_MUL) >> LUMA_ATTENUATE_SHIFT
    values = values + np.where(_bright_mask(indices), INTENSITY_GAIN_INT, 0).astype(np.uint32)

    signal = np.minimum(values, 255).astype(np.uint8)
    h, w = signal.shape[:2]
    return signal.reshape(h, w * 2)


def encode_indices(indices, integer=True):
    """Encode a CGA index raster (H x W) to a composite signal (H x 2W, uint8)."""
    if np.ndim(indices) != 2:
        raise ValueError(f"Expected a 2D index raster, got shape {np.shape(indices)}")
    if integer:
        return encode_indices_int(indices)
    return encode_indices_float(indices)


def encode_frame(frame, integer=True):
    """Quantize an RGB(A) frame to CGA colors and encode it to composite.

    Args:
        frame: RGB or RGBA image (H x W x 3|4, uint8).
        integer: Use the fixed-point encoder (default) instead of float.

    Returns:
        Composite signal as numpy array (H x 2W, uint8).
    """
    t0 = time.perf_counter()
    indices = quantize_frame(frame)
    logger.debug("RGBA->CGA conversion took: %.3f ms",
                 (time.perf_counter() - t0) * 1000.0)

    t0 = time.perf_counter()
    signal = encode_indices(indices, integer=integer)
    logger.debug("Composite conversion took: %.3f ms",
                 (time.perf_counter() - t0) * 1000.0)
    return signal
