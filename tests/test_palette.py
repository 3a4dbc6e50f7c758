"""Tests for cga_composite.palette."""

import numpy as np
import pytest

from cga_composite.constants import CGA_RGB_TABLE
from cga_composite.palette import (
    rgb_distance_squared, rgb_to_cga, quantize_frame, indices_to_rgb,
)


class TestRgbDistanceSquared:
    def test_zero(self):
        assert rgb_distance_squared((10, 20, 30), (10, 20, 30)) == 0

    def test_no_uint8_wraparound(self):
        a = np.array([0, 0, 0], dtype=np.uint8)
        b = np.array([255, 255, 255], dtype=np.uint8)
        assert rgb_distance_squared(a, b) == 3 * 255 * 255


class TestRgbToCga:
    def test_black_fast_path(self):
        assert rgb_to_cga((0, 0, 0)) == 0

    def test_white_fast_path(self):
        assert rgb_to_cga((255, 255, 255)) == 15

    def test_exact_palette_entries(self):
        for i, entry in enumerate(CGA_RGB_TABLE):
            assert rgb_to_cga(entry) == i

    def test_nearest(self):
        assert rgb_to_cga((250, 250, 80)) == 14
        assert rgb_to_cga((160, 90, 10)) == 6

    def test_tie_goes_to_lower_index(self):
        # Equidistant from black (0) and blue (1)
        assert rgb_to_cga((0, 0, 85)) == 0
        # Equidistant from black (0) and green (2)
        assert rgb_to_cga((0, 85, 0)) == 0

    def test_deterministic(self):
        rng = np.random.default_rng(7)
        for rgb in rng.integers(0, 256, (50, 3)):
            assert rgb_to_cga(rgb) == rgb_to_cga(rgb)


class TestQuantizeFrame:
    def test_output_shape_and_dtype(self, sample_frame):
        indices = quantize_frame(sample_frame)
        assert indices.shape == sample_frame.shape[:2]
        assert indices.dtype == np.uint8

    def test_matches_scalar_quantizer(self, sample_frame):
        indices = quantize_frame(sample_frame)
        for y in range(sample_frame.shape[0]):
            for x in range(sample_frame.shape[1]):
                assert indices[y, x] == rgb_to_cga(sample_frame[y, x])

    def test_tie_break_matches_scalar(self):
        frame = np.array([[[0, 0, 85], [0, 85, 0]]], dtype=np.uint8)
        np.testing.assert_array_equal(quantize_frame(frame), [[0, 0]])

    def test_alpha_ignored(self):
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        rgba[..., :3] = 255
        rgba[0, 0, 3] = 0
        np.testing.assert_array_equal(quantize_frame(rgba), np.full((2, 2), 15))

    def test_palette_frame_roundtrip(self):
        indices = np.arange(16, dtype=np.uint8).reshape(2, 8)
        np.testing.assert_array_equal(quantize_frame(indices_to_rgb(indices)), indices)


class TestIndicesToRgb:
    def test_shape(self):
        rgb = indices_to_rgb(np.zeros((3, 5), dtype=np.uint8))
        assert rgb.shape == (3, 5, 3)
        assert rgb.dtype == np.uint8

    def test_lookup(self):
        rgb = indices_to_rgb(np.array([[1, 15]]))
        assert tuple(rgb[0, 0]) == (0, 0, 0xAA)
        assert tuple(rgb[0, 1]) == (255, 255, 255)
