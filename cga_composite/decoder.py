"""NTSC artifact color decoder: composite luma signal -> RGBA frames.

Color sampling math adapted from https://www.shadertoy.com/view/Mdffz7 by xot.
"""

import logging
import time

import numpy as np

from .constants import (
    YIQ_TO_RGB, TAU, CCYCLE, CCYCLE_HALF, WIDE_TAPS, SUBCARRIER_FREQ,
    CHROMA_GAIN, CHROMA_BIAS,
    DEFAULT_HUE, DEFAULT_SAT, DEFAULT_LUMA,
    METHOD_FAST, METHOD_ACCURATE, SAMPLE_METHODS,
    OUTPUT_RGB, OUTPUT_LUMA, OUTPUT_CHROMA, OUTPUT_TYPES,
)
from .filters import wide_weights

logger = logging.getLogger(__name__)

_F = np.float32


def adjust(yiq, hue, sat, bri):
    """Adjust YIQ colors (... x 3) by hue (radians), saturation and brightness.

    The matrix is applied to row vectors, which rotates the (I, Q) plane
    clockwise by ``hue``.
    """
    c = np.cos(hue)
    s = np.sin(hue)
    m = np.array([
        [bri, 0.0,      0.0    ],
        [0.0, sat * c, -s      ],
        [0.0, s,        sat * c],
    ], dtype=np.float32)
    return np.asarray(yiq, dtype=np.float32) @ m


def yiq_to_rgb(yiq):
    """Convert YIQ colors (... x 3, float32) to RGB in [0, 1] scale."""
    return np.asarray(yiq, dtype=np.float32) @ YIQ_TO_RGB.T


def to_u8_clamped(values):
    """Clamp to [0, 255] and truncate to uint8. NaN maps to 0."""
    v = np.nan_to_num(np.asarray(values, dtype=np.float32),
                      nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(v, 0.0, 255.0).astype(np.uint8)


def sample_gray(signal, x, y):
    """Sample a grayscale raster at integer (x, y), clamped to its edges.

    x and y may be scalars or broadcastable integer arrays.

    Returns:
        Sample value(s) in [0, 1] (float32).
    """
    h, w = signal.shape[:2]
    xi = np.clip(x, 0, w - 1)
    yi = np.clip(y, 0, h - 1)
    return signal[yi, xi].astype(np.float32) / _F(255.0)


def sample_rgb(frame, x, y):
    """Sample an RGB(A) raster at integer (x, y), clamped to its edges.

    Returns:
        RGB value(s) in [0, 1] (... x 3, float32). Alpha is dropped.
    """
    h, w = frame.shape[:2]
    xi = np.clip(x, 0, w - 1)
    yi = np.clip(y, 0, h - 1)
    return frame[yi, xi, :3].astype(np.float32) / _F(255.0)


def build_sync_table(width):
    """Subcarrier reference for the fast decoder.

    Entry k holds (phase, cos, sin) for composite column ``k - CCYCLE_HALF``.

    Returns:
        Array of shape (width + CCYCLE, 3), float32.
    """
    k = np.arange(width + CCYCLE, dtype=np.float32)
    phase = (k - _F(CCYCLE_HALF)) * _F(TAU / 8.0)
    return np.stack([phase, np.cos(phase), np.sin(phase)], axis=-1)


def demodulate_fast(signal):
    """Box-windowed quadrature demodulation over one subcarrier cycle.

    Args:
        signal: Composite signal (H x W, uint8).

    Returns:
        Raw YIQ (H x W/2 x 3, float32).
    """
    h, w = signal.shape
    sync = build_sync_table(w)

    x = np.arange(w // 2)
    n = np.arange(-CCYCLE_HALF, CCYCLE_HALF)
    cols = (x * 2).reshape(-1, 1) + n.reshape(1, -1)        # (W/2, 8)
    rows = np.arange(h).reshape(-1, 1, 1)

    samples = sample_gray(signal, cols[np.newaxis], rows)   # (H, W/2, 8)
    ref = sync[cols + CCYCLE_HALF]                           # (W/2, 8, 3)

    yiq = np.stack([
        samples.sum(axis=-1),
        (samples * ref[..., 1]).sum(axis=-1),
        (samples * ref[..., 2]).sum(axis=-1),
    ], axis=-1)
    return yiq / _F(CCYCLE)


def demodulate_accurate(signal, weights=None):
    """Windowed-sinc quadrature demodulation.

    Each output pixel is filtered over ``len(weights)`` composite samples
    around its position. Sample coordinates are truncated from normalized
    positions scaled by (size - 1), which shifts rows and columns slightly
    towards the origin.

    Args:
        signal: Composite signal (H x W, uint8).
        weights: FIR coefficients (defaults to the 30-tap wide filter).

    Returns:
        Raw YIQ (H x W/2 x 3, float32).
    """
    if weights is None:
        weights = wide_weights()
    weights = np.asarray(weights, dtype=np.float32)
    h, w = signal.shape
    mid = len(weights) // 2
    fw = _F(w)

    u = np.arange(w // 2, dtype=np.float32) / fw
    offsets = (np.arange(len(weights)) - mid).astype(np.float32) / fw
    pos_x = (u + u).reshape(-1, 1) + offsets.reshape(1, -1)  # (W/2, taps)
    phase = _F(TAU) * (_F(SUBCARRIER_FREQ) * fw * pos_x)

    cols = np.trunc(pos_x * _F(w - 1)).astype(np.intp)
    pos_y = np.arange(h, dtype=np.float32) / _F(h)
    rows = np.trunc(pos_y * _F(h - 1)).astype(np.intp).reshape(-1, 1, 1)

    weighted = sample_gray(signal, cols[np.newaxis], rows) * weights
    return np.stack([
        weighted.sum(axis=-1),
        (weighted * np.cos(phase)).sum(axis=-1),
        (weighted * np.sin(phase)).sum(axis=-1),
    ], axis=-1)


def render(yiq, hue, sat, luma, output=OUTPUT_RGB):
    """Render raw YIQ (H x W x 3) to an RGBA frame in the requested mode.

    Luma and chroma modes show the demodulated components before any
    picture adjustment.
    """
    h, w = yiq.shape[:2]
    out = np.empty((h, w, 4), dtype=np.uint8)

    if output == OUTPUT_RGB:
        rgb = yiq_to_rgb(adjust(yiq, hue, sat, luma))
        out[..., :3] = to_u8_clamped(rgb * _F(255.0))
    elif output == OUTPUT_LUMA:
        out[..., :3] = to_u8_clamped(yiq[..., 0:1] * _F(255.0))
    elif output == OUTPUT_CHROMA:
        iq = (_F(CHROMA_GAIN) * yiq[..., 1:3] + _F(CHROMA_BIAS)) * _F(255.0)
        out[..., :2] = to_u8_clamped(iq)
        out[..., 2] = 0
    else:
        raise ValueError(f"Unknown output type: {output}")

    out[..., 3] = 255
    return out


def decode_frame(signal, hue=DEFAULT_HUE, sat=DEFAULT_SAT, luma=DEFAULT_LUMA,
                 method=METHOD_FAST, output=OUTPUT_RGB):
    """Decode a composite signal to an RGBA frame.

    Args:
        signal: Composite signal (H x 2W, uint8).
        hue: Hue rotation in radians.
        sat: Saturation gain.
        luma: Brightness gain.
        method: 'fast' (box filter) or 'accurate' (windowed sinc).
        output: 'rgb', 'luma' or 'chroma'.

    Returns:
        RGBA frame as numpy array (H x W x 4, uint8).
    """
    if method not in SAMPLE_METHODS:
        raise ValueError(f"Unknown sample method: {method}")
    if output not in OUTPUT_TYPES:
        raise ValueError(f"Unknown output type: {output}")
    signal = np.asarray(signal)
    if signal.ndim != 2:
        raise ValueError(f"Expected a 2D composite signal, got shape {signal.shape}")
    if signal.shape[1] % 2:
        raise ValueError(f"Composite width must be even, got {signal.shape[1]}")
    if signal.dtype != np.uint8:
        signal = np.clip(signal, 0, 255).astype(np.uint8)

    t0 = time.perf_counter()
    weights = wide_weights()
    logger.debug("Weight calculation took: %.3f ms",
                 (time.perf_counter() - t0) * 1000.0)

    t0 = time.perf_counter()
    if method == METHOD_ACCURATE:
        yiq = demodulate_accurate(signal, weights)
    else:
        yiq = demodulate_fast(signal)
    frame = render(yiq, hue, sat, luma, output)
    logger.debug("Processing time took: %.3f ms",
                 (time.perf_counter() - t0) * 1000.0)
    return frame


def decode_all(signal, hue=DEFAULT_HUE, sat=DEFAULT_SAT, luma=DEFAULT_LUMA,
               method=METHOD_FAST):
    """Decode a composite signal once per output type.

    Returns:
        Dict mapping 'rgb', 'luma' and 'chroma' to RGBA frames.
    """
    return {
        output: decode_frame(signal, hue, sat, luma, method, output)
        for output in OUTPUT_TYPES
    }


def box_filter_rgb(frame):
    """Average each RGB(A) pixel with its horizontal neighbours (x-2 .. x+1).

    A bandwidth-limited RGB monitor preview, for comparison with the
    composite decode.

    Returns:
        RGBA frame (H x W x 4, uint8).
    """
    h, w = frame.shape[:2]
    x = np.arange(w).reshape(1, -1)
    y = np.arange(h).reshape(-1, 1)

    acc = np.zeros((h, w, 3), dtype=np.float32)
    for n in range(-2, 2):
        acc += sample_rgb(frame, x + n, y)
    acc /= _F(4.0)

    out = np.empty((h, w, 4), dtype=np.uint8)
    out[..., :3] = to_u8_clamped(acc * _F(255.0))
    out[..., 3] = 255
    return out
