"""
Geometric transforms: flips, quarter-turn rotations, crop and resize.

These move whole pixels (alpha included) and, apart from resize, are exact.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from core.constants import ErrorMessages
from core.enums import ResizeFilter
from core.exceptions import InvalidParameterError, OutOfBoundsError
from core.raster import RasterBuffer
from transforms.common import apply_per_image, require_int, round_clip

logger = logging.getLogger(__name__)

INTERPOLATION = {
    ResizeFilter.NEAREST: cv2.INTER_NEAREST_EXACT,
    ResizeFilter.LINEAR: cv2.INTER_LINEAR,
    ResizeFilter.CUBIC: cv2.INTER_CUBIC,
    ResizeFilter.LANCZOS: cv2.INTER_LANCZOS4,
    ResizeFilter.AREA: cv2.INTER_AREA,
}


def _rebuild(buffer: RasterBuffer, pixels: np.ndarray) -> RasterBuffer:
    return RasterBuffer(np.ascontiguousarray(pixels), buffer.color_model)


def flip_horizontal(buffer: RasterBuffer) -> RasterBuffer:
    return _rebuild(buffer, buffer.pixels[:, ::-1])


def flip_vertical(buffer: RasterBuffer) -> RasterBuffer:
    return _rebuild(buffer, buffer.pixels[::-1, :])


def rotate90(buffer: RasterBuffer) -> RasterBuffer:
    """Quarter turn clockwise; width and height swap."""
    return _rebuild(buffer, np.rot90(buffer.pixels, k=-1))


def rotate180(buffer: RasterBuffer) -> RasterBuffer:
    return _rebuild(buffer, np.rot90(buffer.pixels, k=2))


def rotate270(buffer: RasterBuffer) -> RasterBuffer:
    """Three quarter turns clockwise; width and height swap."""
    return _rebuild(buffer, np.rot90(buffer.pixels, k=1))


def crop(buffer: RasterBuffer, x, y, width, height) -> RasterBuffer:
    """
    Copy the rectangle [x, x + width) x [y, y + height) into a new buffer.

    Raises:
        InvalidParameterError: Empty rectangle or negative origin
        OutOfBoundsError: Rectangle not fully inside the buffer
    """
    x = require_int("x", x)
    y = require_int("y", y)
    width = require_int("width", width)
    height = require_int("height", height)

    if width <= 0 or height <= 0:
        raise InvalidParameterError(ErrorMessages.CROP_EMPTY.format(width=width, height=height))

    if x < 0 or y < 0:
        raise InvalidParameterError(ErrorMessages.CROP_NEGATIVE_ORIGIN.format(x=x, y=y))

    if x + width > buffer.width or y + height > buffer.height:
        raise OutOfBoundsError(
            ErrorMessages.CROP_OUT_OF_BOUNDS.format(
                x=x,
                y=y,
                width=width,
                height=height,
                image_width=buffer.width,
                image_height=buffer.height,
            )
        )

    result = buffer.with_dimensions(width, height)
    result.pixels[:, :] = buffer.pixels[y : y + height, x : x + width]
    return result


def _scale_half_up(source: int, numerator: int, denominator: int) -> int:
    """round_half_up(source * numerator / denominator) in integer arithmetic."""
    return (2 * source * numerator + denominator) // (2 * denominator)


def resolve_resize_dimensions(
    source_width: int,
    source_height: int,
    width: Optional[int],
    height: Optional[int],
    preserve_aspect: bool,
) -> Tuple[int, int]:
    """
    Compute the target size of a resize.

    Args:
        source_width: Current buffer width
        source_height: Current buffer height
        width: Requested width or None
        height: Requested height or None
        preserve_aspect: Keep the source aspect ratio

    Returns:
        (width, height) of the result

    Raises:
        InvalidParameterError: No target, non-positive target, or a computed
            dimension of zero
    """
    if width is None and height is None:
        raise InvalidParameterError(ErrorMessages.RESIZE_NO_TARGET)

    if width is not None:
        width = require_int("width", width)
        if width <= 0:
            raise InvalidParameterError(
                ErrorMessages.RESIZE_NON_POSITIVE.format(param="width", value=width)
            )

    if height is not None:
        height = require_int("height", height)
        if height <= 0:
            raise InvalidParameterError(
                ErrorMessages.RESIZE_NON_POSITIVE.format(param="height", value=height)
            )

    if not preserve_aspect:
        return (
            width if width is not None else source_width,
            height if height is not None else source_height,
        )

    if height is None:
        target = (width, _scale_half_up(source_height, width, source_width))
        param, value, other = "width", width, "height"
    elif width is None:
        target = (_scale_half_up(source_width, height, source_height), height)
        param, value, other = "height", height, "width"
    elif width * source_height <= height * source_width:
        # Width is the binding side of the box
        target = (width, _scale_half_up(source_height, width, source_width))
        param, value, other = "width", width, "height"
    else:
        target = (_scale_half_up(source_width, height, source_height), height)
        param, value, other = "height", height, "width"

    if target[0] == 0 or target[1] == 0:
        raise InvalidParameterError(
            ErrorMessages.RESIZE_COMPUTED_ZERO.format(
                width=source_width, height=source_height, param=param, value=value, other=other
            )
        )

    return target


def resize(
    buffer: RasterBuffer,
    width: Optional[int],
    height: Optional[int],
    resize_filter: ResizeFilter,
    preserve_aspect: bool,
) -> RasterBuffer:
    """Resample the buffer to the size computed by resolve_resize_dimensions."""
    try:
        resize_filter = ResizeFilter(resize_filter)
    except ValueError:
        raise InvalidParameterError(f"Unknown resize filter: {resize_filter!r}") from None

    target_width, target_height = resolve_resize_dimensions(
        buffer.width, buffer.height, width, height, preserve_aspect
    )

    if (target_width, target_height) == buffer.size:
        return buffer.copy()

    logger.debug(
        f"Resizing {buffer.width}x{buffer.height} -> {target_width}x{target_height} "
        f"({resize_filter.value})"
    )

    interpolation = INTERPOLATION[resize_filter]
    samples = buffer.pixels.astype(np.float32)
    resized = apply_per_image(
        lambda plane: cv2.resize(
            plane, (target_width, target_height), interpolation=interpolation
        ),
        samples,
    )
    return RasterBuffer(round_clip(resized, buffer.max_value, buffer.dtype), buffer.color_model)
