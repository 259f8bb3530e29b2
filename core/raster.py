"""
Raster buffer - in-memory representation of a single still image.

A RasterBuffer owns a NumPy array of shape (height, width, channels) holding
8-bit or 16-bit samples in row-major order, together with its color model.
Transforms never mutate the buffer they receive; they build a new one.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from core.constants import ErrorMessages, RasterConstants
from core.enums import ColorModel
from core.exceptions import InvalidParameterError, OutOfBoundsError


Pixel = Tuple[int, ...]


class RasterBuffer:
    """Pixel grid plus color model."""

    def __init__(self, pixels: np.ndarray, color_model: ColorModel):
        """
        Wrap a pixel array.

        Args:
            pixels: Array of shape (height, width, channels), uint8 or uint16
            color_model: Channel layout of the samples

        Raises:
            InvalidParameterError: If the array does not satisfy the buffer invariant
        """
        color_model = ColorModel(color_model)

        if pixels.dtype.name not in RasterConstants.SUPPORTED_DTYPES:
            raise InvalidParameterError(
                f"Unsupported sample type {pixels.dtype.name}, "
                f"expected one of {RasterConstants.SUPPORTED_DTYPES}"
            )

        if pixels.ndim != 3:
            raise InvalidParameterError(
                f"Pixel array must have shape (height, width, channels), got {pixels.shape}"
            )

        height, width, channels = pixels.shape
        if width <= 0 or height <= 0:
            raise InvalidParameterError(
                ErrorMessages.INVALID_DIMENSIONS.format(width=width, height=height)
            )

        if channels != color_model.channels:
            raise InvalidParameterError(
                f"Color model {color_model.value} needs {color_model.channels} channels, "
                f"pixel array has {channels}"
            )

        self.pixels = pixels
        self.color_model = color_model

    @classmethod
    def from_array(
        cls, array: np.ndarray, color_model: Optional[ColorModel] = None
    ) -> "RasterBuffer":
        """
        Build a buffer from a 2D or 3D array, copying the data.

        Args:
            array: (height, width) or (height, width, channels) array
            color_model: Channel layout; inferred from the channel count if omitted

        Returns:
            New RasterBuffer
        """
        if array.ndim == 2:
            array = array[:, :, np.newaxis]

        if color_model is None:
            if array.ndim != 3:
                raise InvalidParameterError(f"Cannot infer color model for shape {array.shape}")
            try:
                color_model = ColorModel.for_channel_count(array.shape[2])
            except ValueError as e:
                raise InvalidParameterError(str(e)) from e

        return cls(np.array(array, copy=True, order="C"), color_model)

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        color_model: ColorModel = ColorModel.RGBA,
        fill: Optional[Sequence[int]] = None,
        dtype=np.uint8,
    ) -> "RasterBuffer":
        """Create a buffer of the given size with every pixel set to ``fill``."""
        if width <= 0 or height <= 0:
            raise InvalidParameterError(
                ErrorMessages.INVALID_DIMENSIONS.format(width=width, height=height)
            )

        color_model = ColorModel(color_model)
        pixels = np.full(
            (height, width, color_model.channels), RasterConstants.DEFAULT_FILL_VALUE, dtype=dtype
        )
        buffer = cls(pixels, color_model)

        if fill is not None:
            pixels[:, :] = buffer._check_color(fill)

        return buffer

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    @property
    def channels(self) -> int:
        return self.color_model.channels

    @property
    def color_channels(self) -> int:
        return self.color_model.color_channels

    @property
    def has_alpha(self) -> bool:
        return self.color_model.has_alpha

    @property
    def dtype(self) -> np.dtype:
        return self.pixels.dtype

    @property
    def max_value(self) -> int:
        return int(np.iinfo(self.pixels.dtype).max)

    def get_pixel(self, x: int, y: int) -> Pixel:
        """
        Read one pixel.

        Raises:
            OutOfBoundsError: If (x, y) is outside the buffer
        """
        self._check_coordinates(x, y)
        return tuple(int(v) for v in self.pixels[y, x])

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        """
        Write one pixel in place.

        Raises:
            OutOfBoundsError: If (x, y) is outside the buffer
            InvalidParameterError: If color has the wrong number of channels
        """
        self._check_coordinates(x, y)
        self.pixels[y, x] = self._check_color(color)

    def with_dimensions(
        self, new_width: int, new_height: int, fill: Optional[Sequence[int]] = None
    ) -> "RasterBuffer":
        """
        Create a new buffer of the given size with the same color model and sample type.

        The source buffer is never modified.
        """
        return RasterBuffer.filled(
            new_width, new_height, color_model=self.color_model, fill=fill, dtype=self.dtype
        )

    def copy(self) -> "RasterBuffer":
        return RasterBuffer(self.pixels.copy(), self.color_model)

    def split_alpha(self) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        """Return (color channels, alpha channel or None) as contiguous arrays."""
        if not self.has_alpha:
            return np.ascontiguousarray(self.pixels), None
        color = np.ascontiguousarray(self.pixels[:, :, : self.color_channels])
        alpha = np.ascontiguousarray(self.pixels[:, :, self.color_channels :])
        return color, alpha

    def with_color(self, color: np.ndarray) -> "RasterBuffer":
        """New buffer with the given color channels and this buffer's alpha."""
        if self.has_alpha:
            pixels = np.concatenate([color, self.pixels[:, :, self.color_channels :]], axis=2)
        else:
            pixels = np.array(color, copy=True)
        return RasterBuffer(np.ascontiguousarray(pixels, dtype=self.dtype), self.color_model)

    def _check_coordinates(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(
                ErrorMessages.PIXEL_OUT_OF_BOUNDS.format(
                    x=x, y=y, width=self.width, height=self.height
                )
            )

    def _check_color(self, color: Sequence[int]) -> np.ndarray:
        values = np.asarray(color)
        if values.shape != (self.channels,):
            raise InvalidParameterError(
                ErrorMessages.CHANNEL_MISMATCH.format(
                    expected=self.channels, actual=values.size
                )
            )
        if np.any(values < 0) or np.any(values > self.max_value):
            raise InvalidParameterError(
                f"Channel values must lie in [0, {self.max_value}], got {tuple(color)}"
            )
        return values.astype(self.dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return (
            self.color_model == other.color_model
            and self.dtype == other.dtype
            and self.pixels.shape == other.pixels.shape
            and bool(np.array_equal(self.pixels, other.pixels))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"RasterBuffer({self.width}x{self.height}, {self.color_model.value}, "
            f"{self.dtype.name})"
        )
