"""Tests for cga_composite.constants."""

import numpy as np
import pytest

from cga_composite.constants import (
    CGA_RGB_TABLE, COLOR_GEN_HALF, COLOR_GEN_HALF_INT, COLOR_GEN_EDGES_HALF,
    YIQ_TO_RGB, LUMA_ATTENUATE, LUMA_ATTENUATE_MUL, LUMA_ATTENUATE_SHIFT,
    INTENSITY_GAIN, INTENSITY_GAIN_INT, WIDE_TAPS, NARROW_TAPS,
)


class TestPalette:
    def test_shape_and_dtype(self):
        assert CGA_RGB_TABLE.shape == (16, 3)
        assert CGA_RGB_TABLE.dtype == np.uint8

    def test_black_and_white(self):
        assert tuple(CGA_RGB_TABLE[0]) == (0, 0, 0)
        assert tuple(CGA_RGB_TABLE[15]) == (255, 255, 255)

    def test_brown(self):
        assert tuple(CGA_RGB_TABLE[6]) == (0xAA, 0x55, 0x00)

    def test_read_only(self):
        with pytest.raises(ValueError):
            CGA_RGB_TABLE[0, 0] = 1


class TestWaveformTables:
    def test_shapes(self):
        assert COLOR_GEN_HALF.shape == (8, 8)
        assert COLOR_GEN_HALF_INT.shape == (8, 8)
        assert COLOR_GEN_EDGES_HALF.shape == (8, 8)

    def test_int_table_matches_float_table(self):
        np.testing.assert_array_equal(
            COLOR_GEN_HALF_INT, (COLOR_GEN_HALF * 255).astype(np.uint8))

    def test_black_and_white_rows(self):
        assert not COLOR_GEN_HALF[0].any()
        assert COLOR_GEN_HALF[7].all()
        assert not COLOR_GEN_EDGES_HALF[0].any()
        assert not COLOR_GEN_EDGES_HALF[7].any()

    def test_hue_rows_half_duty(self):
        # Every chromatic hue is high for exactly half a color cycle
        for hue in range(1, 7):
            assert COLOR_GEN_HALF[hue].sum() == 4

    def test_blue_row(self):
        np.testing.assert_array_equal(
            COLOR_GEN_HALF_INT[1], [0, 0, 0, 255, 255, 255, 255, 0])
        np.testing.assert_array_equal(
            np.flatnonzero(COLOR_GEN_EDGES_HALF[1]), [3, 6])

    def test_two_edges_per_hue(self):
        for hue in range(1, 7):
            assert COLOR_GEN_EDGES_HALF[hue].sum() == 2

    def test_read_only(self):
        with pytest.raises(ValueError):
            COLOR_GEN_HALF_INT[1, 0] = 255


class TestGains:
    def test_fixed_point_attenuation(self):
        assert LUMA_ATTENUATE_MUL / (1 << LUMA_ATTENUATE_SHIFT) == LUMA_ATTENUATE

    def test_intensity_gain_scales(self):
        assert INTENSITY_GAIN_INT == pytest.approx(INTENSITY_GAIN * 256)

    def test_tap_counts(self):
        assert NARROW_TAPS == 15
        assert WIDE_TAPS == 30


class TestColorMatrix:
    def test_shape(self):
        assert YIQ_TO_RGB.shape == (3, 3)

    def test_dtype(self):
        assert YIQ_TO_RGB.dtype == np.float32

    def test_luma_only_is_gray(self):
        rgb = YIQ_TO_RGB @ np.array([0.5, 0.0, 0.0], dtype=np.float32)
        np.testing.assert_allclose(rgb, [0.5, 0.5, 0.5])
