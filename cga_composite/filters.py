"""Windowed-sinc FIR weights for chroma demodulation."""

import numpy as np
from scipy.signal import windows

from .constants import NARROW_TAPS, NARROW_CUTOFF, WIDE_TAPS, WIDE_CUTOFF


def build_weights(num_taps, cutoff):
    """Design a normalized Hann-windowed sinc low-pass filter.

    The kernel is centred on tap ``num_taps // 2``, so even tap counts are
    one sample off-centre to the right.

    Args:
        num_taps: Number of filter taps.
        cutoff: Cutoff frequency in cycles per sample.

    Returns:
        FIR filter coefficients summing to 1 (1D array, float32).
    """
    n = np.arange(num_taps)
    window = windows.hann(num_taps, sym=True)
    weights = window * np.sinc(cutoff * (n - num_taps // 2))
    return (weights / weights.sum()).astype(np.float32)


def narrow_weights():
    """15-tap filter with cutoff 0.25 cycles/sample."""
    return build_weights(NARROW_TAPS, NARROW_CUTOFF)


def wide_weights():
    """30-tap filter with cutoff 0.125 cycles/sample (accurate decoder)."""
    return build_weights(WIDE_TAPS, WIDE_CUTOFF)
