"""
Tests for RasterBuffer
"""

import numpy as np
import pytest

from core.enums import ColorModel
from core.exceptions import InvalidParameterError, OutOfBoundsError
from core.raster import RasterBuffer


class TestRasterBufferConstruction:
    """Test buffer creation and validation"""

    def test_filled_dimensions(self):
        buffer = RasterBuffer.filled(6, 3, ColorModel.RGB, fill=(1, 2, 3))
        assert buffer.width == 6
        assert buffer.height == 3
        assert buffer.size == (6, 3)
        assert buffer.channels == 3
        assert buffer.get_pixel(5, 2) == (1, 2, 3)

    def test_filled_rejects_zero_size(self):
        with pytest.raises(InvalidParameterError):
            RasterBuffer.filled(0, 3)

    def test_channel_mismatch_rejected(self):
        with pytest.raises(InvalidParameterError):
            RasterBuffer(np.zeros((2, 2, 3), dtype=np.uint8), ColorModel.RGBA)

    def test_unsupported_dtype_rejected(self):
        with pytest.raises(InvalidParameterError):
            RasterBuffer(np.zeros((2, 2, 3), dtype=np.float32), ColorModel.RGB)

    def test_from_array_infers_model_and_copies(self):
        array = np.zeros((2, 3, 2), dtype=np.uint8)
        buffer = RasterBuffer.from_array(array)
        array[0, 0, 0] = 99

        assert buffer.color_model == ColorModel.LA
        assert buffer.get_pixel(0, 0) == (0, 0)

    def test_from_array_accepts_2d(self):
        buffer = RasterBuffer.from_array(np.full((2, 3), 7, dtype=np.uint16))
        assert buffer.color_model == ColorModel.L
        assert buffer.max_value == 65535
        assert buffer.get_pixel(2, 1) == (7,)


class TestRasterBufferPixels:
    """Test pixel access"""

    def test_set_and_get_pixel(self, red_rgba):
        red_rgba.set_pixel(1, 2, (10, 20, 30, 40))
        assert red_rgba.get_pixel(1, 2) == (10, 20, 30, 40)
        assert red_rgba.get_pixel(2, 1) == (255, 0, 0, 255)

    @pytest.mark.parametrize("x,y", [(-1, 0), (4, 0), (0, 4), (0, -1)])
    def test_out_of_bounds(self, red_rgba, x, y):
        with pytest.raises(OutOfBoundsError):
            red_rgba.get_pixel(x, y)
        with pytest.raises(OutOfBoundsError):
            red_rgba.set_pixel(x, y, (0, 0, 0, 0))

    def test_set_pixel_wrong_channel_count(self, red_rgba):
        with pytest.raises(InvalidParameterError):
            red_rgba.set_pixel(0, 0, (1, 2, 3))

    def test_set_pixel_out_of_range_value(self, red_rgba):
        with pytest.raises(InvalidParameterError):
            red_rgba.set_pixel(0, 0, (256, 0, 0, 0))


class TestRasterBufferDerived:
    """Test buffers derived from an existing one"""

    def test_with_dimensions_keeps_model_and_dtype(self, gray_l):
        other = gray_l.with_dimensions(2, 7)
        assert other.size == (2, 7)
        assert other.color_model == ColorModel.L
        assert other.dtype == gray_l.dtype
        assert gray_l.size == (5, 3)

    def test_copy_is_independent(self, red_rgba):
        copy = red_rgba.copy()
        copy.set_pixel(0, 0, (0, 0, 0, 0))
        assert red_rgba.get_pixel(0, 0) == (255, 0, 0, 255)
        assert copy != red_rgba

    def test_split_alpha(self, gradient_rgba):
        color, alpha = gradient_rgba.split_alpha()
        assert color.shape == (4, 8, 3)
        assert alpha.shape == (4, 8, 1)

    def test_split_alpha_without_alpha(self, gradient_rgb):
        color, alpha = gradient_rgb.split_alpha()
        assert alpha is None
        assert color.shape == (4, 8, 3)

    def test_with_color_keeps_alpha(self, gradient_rgba):
        color, alpha = gradient_rgba.split_alpha()
        result = gradient_rgba.with_color(np.zeros_like(color))
        assert np.array_equal(result.pixels[:, :, 3:], alpha)
        assert not result.pixels[:, :, :3].any()

    def test_equality(self, red_rgba):
        same = RasterBuffer.filled(4, 4, ColorModel.RGBA, fill=(255, 0, 0, 255))
        as_rgb = RasterBuffer.filled(4, 4, ColorModel.RGB, fill=(255, 0, 0))
        assert red_rgba == same
        assert red_rgba != as_rgb

    def test_repr(self, red_rgba):
        assert repr(red_rgba) == "RasterBuffer(4x4, RGBA, uint8)"
