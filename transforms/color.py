"""
Per-pixel color transforms.

All of them work on the color channels only and leave alpha untouched.
Arithmetic is done in floating point and rounded half up before clamping.
"""

import logging

import cv2
import numpy as np

from core.constants import ColorConstants, ErrorMessages
from core.enums import ColorModel
from core.exceptions import InvalidColorModelError
from core.raster import RasterBuffer
from transforms.common import require_finite, round_clip

logger = logging.getLogger(__name__)


def grayscale(buffer: RasterBuffer) -> RasterBuffer:
    """
    Replace R, G and B with the pixel's luminance.

    The color model is kept, so an RGBA buffer stays RGBA with R == G == B.
    Gray buffers are returned unchanged.

    Raises:
        InvalidColorModelError: If the model has no luminance mapping
    """
    if not buffer.color_model.has_luminance:
        raise InvalidColorModelError(
            ErrorMessages.NO_LUMINANCE.format(model=buffer.color_model.value)
        )

    if buffer.color_model in (ColorModel.L, ColorModel.LA):
        return buffer.copy()

    color, _ = buffer.split_alpha()
    weights = np.array(ColorConstants.LUMA_WEIGHTS, dtype=np.float64)
    luma = color.astype(np.float64) @ weights
    luma = round_clip(luma, buffer.max_value, buffer.dtype)
    return buffer.with_color(np.repeat(luma[:, :, np.newaxis], 3, axis=2))


def invert(buffer: RasterBuffer) -> RasterBuffer:
    color, _ = buffer.split_alpha()
    return buffer.with_color(buffer.max_value - color)


def brighten(buffer: RasterBuffer, delta) -> RasterBuffer:
    """Add delta to every color channel, clamping to the sample range."""
    delta = require_finite("delta", delta)
    if delta == 0:
        return buffer.copy()

    color, _ = buffer.split_alpha()
    return buffer.with_color(
        round_clip(color.astype(np.float64) + delta, buffer.max_value, buffer.dtype)
    )


def contrast(buffer: RasterBuffer, factor) -> RasterBuffer:
    """
    Stretch (factor > 1), flatten (0 <= factor < 1) or mirror (factor < 0)
    every color channel around the mid value max_value / 2.

    A factor of -1.0 gives exactly the same result as invert.
    """
    factor = require_finite("factor", factor)
    if factor == 1.0:
        return buffer.copy()

    mid = buffer.max_value / 2.0
    color, _ = buffer.split_alpha()
    adjusted = mid + (color.astype(np.float64) - mid) * factor
    return buffer.with_color(round_clip(adjusted, buffer.max_value, buffer.dtype))


def normalize_degrees(degrees: float) -> float:
    """Map any angle into [0, 360)."""
    normalized = degrees % ColorConstants.FULL_TURN_DEGREES
    # -1e-20 % 360 gives 360.0 in floating point
    if normalized >= ColorConstants.FULL_TURN_DEGREES:
        normalized = 0.0
    return normalized


def hue_rotate(buffer: RasterBuffer, degrees) -> RasterBuffer:
    """
    Shift the hue of every pixel by ``degrees`` through HSV.

    Any multiple of 360 degrees returns the buffer unchanged. Gray buffers
    carry no hue and are returned unchanged.

    Raises:
        InvalidColorModelError: If the model cannot be mapped to HSV (CMYK)
    """
    degrees = normalize_degrees(require_finite("degrees", degrees))

    if buffer.color_model in (ColorModel.L, ColorModel.LA):
        return buffer.copy()

    if not buffer.color_model.has_hue:
        raise InvalidColorModelError(ErrorMessages.NO_HUE.format(model=buffer.color_model.value))

    if degrees == 0.0:
        return buffer.copy()

    color, _ = buffer.split_alpha()
    rgb = color.astype(np.float32) / np.float32(buffer.max_value)

    # Float input gives H in [0, 360), S and V in [0, 1]
    hsv = cv2.cvtColor(rgb, cv2.COLOR_RGB2HSV)
    hsv[:, :, 0] = np.mod(hsv[:, :, 0] + np.float32(degrees), np.float32(360.0))
    rotated = cv2.cvtColor(hsv, cv2.COLOR_HSV2RGB)

    return buffer.with_color(
        round_clip(rotated.astype(np.float64) * buffer.max_value, buffer.max_value, buffer.dtype)
    )
