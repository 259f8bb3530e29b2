"""
Shared helpers for transforms: parameter checks and sample conversion.
"""

import math
from typing import Callable

import numpy as np

from core.constants import ErrorMessages
from core.exceptions import InvalidParameterError


def require_finite(param: str, value) -> float:
    """Return ``value`` as float, raising InvalidParameterError if it is not a finite number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(
            ErrorMessages.NON_FINITE_PARAMETER.format(param=param, value=value)
        ) from None
    if not math.isfinite(number):
        raise InvalidParameterError(
            ErrorMessages.NON_FINITE_PARAMETER.format(param=param, value=value)
        )
    return number


def require_non_negative(param: str, value) -> float:
    number = require_finite(param, value)
    if number < 0:
        raise InvalidParameterError(
            ErrorMessages.NEGATIVE_PARAMETER.format(param=param, value=value)
        )
    return number


def require_int(param: str, value) -> int:
    """Accept ints (and integral floats); reject bools and fractions."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer)):
        raise InvalidParameterError(f"{param} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidParameterError(f"{param} must be an integer, got {value!r}")
    return int(value)


def round_clip(values: np.ndarray, max_value: int, dtype) -> np.ndarray:
    """
    Convert float samples back to integer samples.

    Rounds half up, then clamps to [0, max_value].
    """
    return np.clip(np.floor(values + 0.5), 0, max_value).astype(dtype)


def apply_per_image(
    func: Callable[[np.ndarray], np.ndarray], samples: np.ndarray
) -> np.ndarray:
    """
    Run an OpenCV function over a (height, width, channels) float32 array.

    OpenCV drops the channel axis of single channel images and rejects more
    than four channels for some calls, so channels are processed one at a time
    when needed. The result keeps the channel axis; its height and width are
    whatever ``func`` produced (cv2.resize changes them).
    """
    channels = samples.shape[2]
    if channels in (3, 4):
        result = func(np.ascontiguousarray(samples))
        return result.reshape(result.shape[0], result.shape[1], channels)

    planes = [func(np.ascontiguousarray(samples[:, :, c])) for c in range(channels)]
    return np.stack([plane.reshape(plane.shape[0], plane.shape[1]) for plane in planes], axis=2)
