"""
Transform algorithms for every operation variant.

This package provides:
- geometry: flips, rotations, crop, resize
- color: grayscale, invert, brighten, contrast, hue rotation
- filtering: blur, unsharpen, 3x3 kernels

apply_operation is the single dispatch point from an Operation value to its
algorithm. It validates the operation's parameters against the buffer it is
about to transform and returns a new buffer; the input is never modified.
"""

import logging
from dataclasses import dataclass

import cv2

from core.constants import ResizeConstants
from core.enums import ResizeFilter
from core.exceptions import InvalidParameterError
from core.operations import (
    Blur,
    Brighten,
    Contrast,
    Crop,
    Filter3x3,
    FlipHorizontal,
    FlipVertical,
    Grayscale,
    HueRotate,
    Invert,
    Operation,
    Resize,
    Rotate90,
    Rotate180,
    Rotate270,
    SetResizeFilter,
    Unsharpen,
    operation_name,
)
from core.raster import RasterBuffer
from transforms import color, filtering, geometry

logger = logging.getLogger(__name__)

__all__ = ["RunContext", "apply_operation", "color", "filtering", "geometry"]


@dataclass
class RunContext:
    """
    State scoped to a single pipeline run.

    Created fresh for every run, so nothing leaks between runs.
    """

    resize_filter: ResizeFilter = ResizeConstants.DEFAULT_FILTER


def _set_resize_filter(context: RunContext, resize_filter) -> None:
    try:
        context.resize_filter = ResizeFilter(resize_filter)
    except ValueError:
        raise InvalidParameterError(f"Unknown resize filter: {resize_filter!r}") from None


def apply_operation(
    operation: Operation, buffer: RasterBuffer, context: RunContext
) -> RasterBuffer:
    """
    Validate and apply one operation.

    Args:
        operation: Operation variant
        buffer: Current buffer (not modified)
        context: Run-scoped state (resize filter)

    Returns:
        New buffer

    Raises:
        InvalidParameterError, OutOfBoundsError, InvalidColorModelError.
        OpenCV rejecting the arguments it is given is reported as
        InvalidParameterError.
    """
    try:
        return _dispatch(operation, buffer, context)
    except cv2.error as e:
        logger.error(f"OpenCV failed on {operation!r}: {e}")
        raise InvalidParameterError(
            f"{operation_name(operation)} parameters rejected by OpenCV: {e}"
        ) from e


def _dispatch(operation: Operation, buffer: RasterBuffer, context: RunContext) -> RasterBuffer:
    if isinstance(operation, Blur):
        return filtering.blur(buffer, operation.sigma)
    elif isinstance(operation, Brighten):
        return color.brighten(buffer, operation.delta)
    elif isinstance(operation, Contrast):
        return color.contrast(buffer, operation.factor)
    elif isinstance(operation, Crop):
        return geometry.crop(buffer, operation.x, operation.y, operation.width, operation.height)
    elif isinstance(operation, Filter3x3):
        return filtering.filter3x3(buffer, operation.weights)
    elif isinstance(operation, FlipHorizontal):
        return geometry.flip_horizontal(buffer)
    elif isinstance(operation, FlipVertical):
        return geometry.flip_vertical(buffer)
    elif isinstance(operation, Grayscale):
        return color.grayscale(buffer)
    elif isinstance(operation, HueRotate):
        return color.hue_rotate(buffer, operation.degrees)
    elif isinstance(operation, Invert):
        return color.invert(buffer)
    elif isinstance(operation, Resize):
        resize_filter = operation.filter if operation.filter is not None else context.resize_filter
        return geometry.resize(
            buffer,
            operation.width,
            operation.height,
            resize_filter,
            operation.preserve_aspect,
        )
    elif isinstance(operation, Rotate90):
        return geometry.rotate90(buffer)
    elif isinstance(operation, Rotate180):
        return geometry.rotate180(buffer)
    elif isinstance(operation, Rotate270):
        return geometry.rotate270(buffer)
    elif isinstance(operation, Unsharpen):
        return filtering.unsharpen(
            buffer, operation.sigma, operation.amount, operation.threshold
        )
    elif isinstance(operation, SetResizeFilter):
        _set_resize_filter(context, operation.filter)
        logger.debug(f"Resize filter set to {context.resize_filter.value}")
        return buffer.copy()
    else:
        raise InvalidParameterError(f"Unknown operation: {operation!r}")
