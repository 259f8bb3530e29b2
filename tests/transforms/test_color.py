"""
Tests for per-pixel color transforms
"""

import numpy as np
import pytest

from core.enums import ColorModel
from core.exceptions import InvalidColorModelError, InvalidParameterError
from core.raster import RasterBuffer
from transforms import color


class TestGrayscale:
    """Test luminance conversion"""

    def test_pure_red(self, red_rgba):
        result = color.grayscale(red_rgba)
        assert result.color_model == ColorModel.RGBA
        for x in range(4):
            for y in range(4):
                assert result.get_pixel(x, y) == (54, 54, 54, 255)

    def test_white_stays_white(self):
        buffer = RasterBuffer.filled(2, 2, ColorModel.RGB, fill=(255, 255, 255))
        assert color.grayscale(buffer) == buffer

    def test_gray_model_unchanged(self, gray_l):
        assert color.grayscale(gray_l) == gray_l

    def test_cmyk_rejected(self):
        buffer = RasterBuffer.filled(2, 2, ColorModel.CMYK, fill=(0, 0, 0, 0))
        with pytest.raises(InvalidColorModelError):
            color.grayscale(buffer)


class TestInvert:
    """Test inversion"""

    def test_invert_keeps_alpha(self, red_rgba):
        assert color.invert(red_rgba).get_pixel(0, 0) == (0, 255, 255, 255)

    def test_invert_twice_is_identity(self, gradient_rgba):
        assert color.invert(color.invert(gradient_rgba)) == gradient_rgba

    def test_sixteen_bit(self):
        buffer = RasterBuffer.from_array(np.full((2, 2), 1000, dtype=np.uint16))
        assert color.invert(buffer).get_pixel(0, 0) == (64535,)


class TestBrighten:
    """Test brightness offset"""

    def test_clamps(self, red_rgba):
        result = color.brighten(red_rgba, 10)
        assert result.get_pixel(0, 0) == (255, 10, 10, 255)

    def test_negative_delta(self, red_rgba):
        assert color.brighten(red_rgba, -300).get_pixel(0, 0) == (0, 0, 0, 255)

    def test_fractional_delta_rounds_half_up(self):
        buffer = RasterBuffer.filled(1, 1, ColorModel.L, fill=(10,))
        assert color.brighten(buffer, 0.5).get_pixel(0, 0) == (11,)

    def test_non_finite(self, red_rgba):
        with pytest.raises(InvalidParameterError):
            color.brighten(red_rgba, float("nan"))


class TestContrast:
    """Test contrast scaling"""

    def test_factor_one_is_identity(self, gradient_rgba):
        assert color.contrast(gradient_rgba, 1.0) == gradient_rgba

    def test_factor_zero_flattens_to_mid(self, gradient_rgb):
        result = color.contrast(gradient_rgb, 0.0)
        # 127.5 rounds half up
        assert np.all(result.pixels == 128)

    def test_stretch(self):
        buffer = RasterBuffer.filled(1, 1, ColorModel.L, fill=(100,))
        assert color.contrast(buffer, 2.0).get_pixel(0, 0) == (73,)

    def test_minus_one_equals_invert(self, gradient_rgba):
        assert color.contrast(gradient_rgba, -1.0) == color.invert(gradient_rgba)

    def test_alpha_untouched(self, gradient_rgba):
        result = color.contrast(gradient_rgba, 3.0)
        assert np.array_equal(result.pixels[:, :, 3], gradient_rgba.pixels[:, :, 3])


class TestHueRotate:
    """Test hue rotation"""

    def test_red_to_green(self, red_rgba):
        assert color.hue_rotate(red_rgba, 120).get_pixel(0, 0) == (0, 255, 0, 255)

    def test_red_to_blue(self, red_rgba):
        assert color.hue_rotate(red_rgba, 240).get_pixel(0, 0) == (0, 0, 255, 255)

    @pytest.mark.parametrize("degrees", [0, 360, -360, 720, 3600])
    def test_full_turns_are_identity(self, gradient_rgba, degrees):
        assert color.hue_rotate(gradient_rgba, degrees) == gradient_rgba

    def test_angle_wraps(self, gradient_rgba):
        assert color.hue_rotate(gradient_rgba, 480) == color.hue_rotate(gradient_rgba, 120)
        assert color.hue_rotate(gradient_rgba, -240) == color.hue_rotate(gradient_rgba, 120)

    def test_gray_pixels_unchanged(self):
        buffer = RasterBuffer.filled(2, 2, ColorModel.RGB, fill=(90, 90, 90))
        assert color.hue_rotate(buffer, 77) == buffer

    def test_gray_model_unchanged(self, gray_l):
        assert color.hue_rotate(gray_l, 45) == gray_l

    def test_cmyk_rejected(self):
        buffer = RasterBuffer.filled(2, 2, ColorModel.CMYK, fill=(0, 0, 0, 0))
        with pytest.raises(InvalidColorModelError):
            color.hue_rotate(buffer, 90)

    def test_normalize_degrees(self):
        assert color.normalize_degrees(-90) == 270
        assert color.normalize_degrees(-1e-20) == 0.0
