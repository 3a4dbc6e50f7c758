"""Tests for cga_composite.colorbars."""

import numpy as np

from cga_composite.colorbars import generate_colorbars, generate_colorbar_indices
from cga_composite.constants import CGA_RGB_TABLE
from cga_composite.palette import quantize_frame


class TestGenerateColorbarIndices:
    def test_default_shape(self):
        indices = generate_colorbar_indices()
        assert indices.shape == (200, 640)
        assert indices.dtype == np.uint8

    def test_bar_order(self):
        indices = generate_colorbar_indices(640, 10)
        assert indices[0, 0] == 0
        assert indices[0, 40] == 1
        assert indices[0, 639] == 15
        assert len(np.unique(indices[0])) == 16

    def test_bottom_half_dithered(self):
        indices = generate_colorbar_indices(640, 10)
        assert not indices[5:, 1::2].any()
        np.testing.assert_array_equal(indices[5:, 0::2], indices[:5, 0::2])

    def test_narrow_width(self):
        indices = generate_colorbar_indices(8, 2)
        assert indices.max() <= 15


class TestGenerateColorbars:
    def test_shape(self):
        frame = generate_colorbars(640, 20)
        assert frame.shape == (20, 640, 4)
        assert frame.dtype == np.uint8

    def test_opaque(self):
        assert np.all(generate_colorbars(640, 4)[..., 3] == 255)

    def test_palette_colors(self):
        frame = generate_colorbars(640, 4)
        assert tuple(frame[0, 600, :3]) == tuple(CGA_RGB_TABLE[15])
        assert tuple(frame[0, 260, :3]) == tuple(CGA_RGB_TABLE[6])

    def test_quantizes_back_to_indices(self):
        np.testing.assert_array_equal(
            quantize_frame(generate_colorbars(640, 6)),
            generate_colorbar_indices(640, 6))
