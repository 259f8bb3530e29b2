"""
Convolution based transforms: Gaussian blur, unsharp mask and 3x3 kernels.

Borders use edge-clamped sampling (cv2.BORDER_REPLICATE). Alpha is left
untouched.
"""

import logging
from collections.abc import Sequence

import cv2
import numpy as np

from core.constants import ErrorMessages, FilterConstants
from core.exceptions import InvalidParameterError
from core.raster import RasterBuffer
from transforms.common import (
    apply_per_image,
    require_finite,
    require_non_negative,
    round_clip,
)

logger = logging.getLogger(__name__)


def _require_sigma(sigma) -> float:
    sigma = require_non_negative("sigma", sigma)
    if sigma > FilterConstants.MAX_SIGMA:
        raise InvalidParameterError(
            ErrorMessages.SIGMA_TOO_LARGE.format(
                param="sigma", limit=FilterConstants.MAX_SIGMA, value=sigma
            )
        )
    return sigma


def _gaussian(samples: np.ndarray, sigma: float) -> np.ndarray:
    return apply_per_image(
        lambda plane: cv2.GaussianBlur(
            plane, (0, 0), sigmaX=sigma, sigmaY=sigma, borderType=cv2.BORDER_REPLICATE
        ),
        samples,
    )


def blur(buffer: RasterBuffer, sigma) -> RasterBuffer:
    """
    Gaussian blur with standard deviation ``sigma``; 0 returns an unchanged copy.

    Raises:
        InvalidParameterError: If sigma is negative, not finite or above MAX_SIGMA
    """
    sigma = _require_sigma(sigma)
    if sigma == 0:
        return buffer.copy()

    color, _ = buffer.split_alpha()
    blurred = _gaussian(color.astype(np.float32), sigma)
    return buffer.with_color(round_clip(blurred, buffer.max_value, buffer.dtype))


def unsharpen(buffer: RasterBuffer, sigma, amount, threshold) -> RasterBuffer:
    """
    Unsharp mask.

    Each color sample v with blurred value b becomes v + amount * (v - b)
    when |v - b| exceeds ``threshold``, and stays v otherwise.

    Args:
        buffer: Source buffer
        sigma: Gaussian sigma of the blur (0 means no-op)
        amount: Blend weight of the detail layer (0 means no-op)
        threshold: Minimum absolute difference that gets sharpened

    Raises:
        InvalidParameterError: If any parameter is negative or not finite, or sigma
            is above MAX_SIGMA
    """
    sigma = _require_sigma(sigma)
    amount = require_non_negative("amount", amount)
    threshold = require_non_negative("threshold", threshold)

    if sigma == 0 or amount == 0:
        return buffer.copy()

    color, _ = buffer.split_alpha()
    samples = color.astype(np.float32)
    detail = samples - _gaussian(samples, sigma)

    sharpened = np.where(np.abs(detail) > threshold, samples + amount * detail, samples)
    return buffer.with_color(round_clip(sharpened, buffer.max_value, buffer.dtype))


def _kernel(weights) -> np.ndarray:
    if isinstance(weights, (str, bytes)) or not isinstance(weights, (Sequence, np.ndarray)):
        raise InvalidParameterError(
            f"filter3x3 weights must be a sequence of numbers, got {weights!r}"
        )

    if len(weights) != FilterConstants.KERNEL_3X3_SIZE:
        raise InvalidParameterError(ErrorMessages.KERNEL_SIZE.format(count=len(weights)))

    values = [require_finite(f"weights[{i}]", w) for i, w in enumerate(weights)]
    kernel = np.array(values, dtype=np.float64).reshape(3, 3)

    total = kernel.sum()
    if total != 0:
        kernel = kernel / total

    return kernel.astype(np.float32)


def filter3x3(buffer: RasterBuffer, weights) -> RasterBuffer:
    """
    Correlate each color channel with a row-major 3x3 kernel.

    The kernel is divided by the sum of its weights unless that sum is zero,
    so brightness is preserved for smoothing kernels and edge kernels keep
    their raw response.

    Raises:
        InvalidParameterError: If there are not exactly 9 finite weights
    """
    kernel = _kernel(weights)

    color, _ = buffer.split_alpha()
    filtered = apply_per_image(
        lambda plane: cv2.filter2D(plane, -1, kernel, borderType=cv2.BORDER_REPLICATE),
        color.astype(np.float32),
    )
    return buffer.with_color(round_clip(filtered, buffer.max_value, buffer.dtype))
