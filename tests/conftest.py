"""Shared fixtures for CGA composite tests."""

import numpy as np
import pytest

from cga_composite.encoder import encode_frame


@pytest.fixture
def sample_frame():
    """Small 8x32 RGB frame for fast tests."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, (8, 32, 3), dtype=np.uint8)


@pytest.fixture
def encoded_signal(sample_frame):
    """Pre-encoded composite signal from sample_frame."""
    return encode_frame(sample_frame)


@pytest.fixture
def white_row_signal():
    """Uniform full-scale composite row, 1280 samples wide."""
    return np.full((1, 1280), 255, dtype=np.uint8)
