"""
Pytest configuration and fixtures for image operations engine tests
"""

import numpy as np
import pytest

from core.engine import Engine
from core.enums import ColorModel
from core.raster import RasterBuffer


@pytest.fixture
def red_rgba():
    """4x4 opaque pure red buffer"""
    return RasterBuffer.filled(4, 4, ColorModel.RGBA, fill=(255, 0, 0, 255))


@pytest.fixture
def gradient_rgba():
    """8x4 RGBA buffer where every pixel is different and alpha varies"""
    height, width = 4, 8
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    ys, xs = np.mgrid[0:height, 0:width]
    pixels[:, :, 0] = xs * 30
    pixels[:, :, 1] = ys * 60
    pixels[:, :, 2] = (xs + ys) * 17
    pixels[:, :, 3] = 255 - xs * 10
    return RasterBuffer(pixels, ColorModel.RGBA)


@pytest.fixture
def gradient_rgb(gradient_rgba):
    """8x4 RGB buffer with the gradient's color channels"""
    color, _ = gradient_rgba.split_alpha()
    return RasterBuffer(color, ColorModel.RGB)


@pytest.fixture
def gray_l():
    """5x3 single channel buffer"""
    pixels = np.arange(15, dtype=np.uint8).reshape(3, 5, 1) * 10
    return RasterBuffer(pixels, ColorModel.L)


@pytest.fixture
def engine():
    """Engine instance"""
    return Engine()
