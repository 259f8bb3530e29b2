"""
Centralized enums for the image operations engine.
"""

from enum import Enum


class ColorModel(str, Enum):
    """Channel layout of a raster buffer (values match Pillow mode names)."""

    L = "L"
    LA = "LA"
    RGB = "RGB"
    RGBA = "RGBA"
    CMYK = "CMYK"

    @property
    def channels(self) -> int:
        return len(self.value)

    @property
    def has_alpha(self) -> bool:
        return self.value.endswith("A")

    @property
    def has_luminance(self) -> bool:
        return self in (ColorModel.L, ColorModel.LA, ColorModel.RGB, ColorModel.RGBA)

    @property
    def has_hue(self) -> bool:
        return self in (ColorModel.RGB, ColorModel.RGBA)

    @property
    def color_channels(self) -> int:
        """Number of channels excluding alpha."""
        return self.channels - 1 if self.has_alpha else self.channels

    @classmethod
    def for_channel_count(cls, channels: int) -> "ColorModel":
        """Default model for a channel count (1, 2, 3 or 4)."""
        try:
            return {1: cls.L, 2: cls.LA, 3: cls.RGB, 4: cls.RGBA}[channels]
        except KeyError:
            raise ValueError(f"No default color model for {channels} channels") from None


class ResizeFilter(str, Enum):
    """Resampling filters available to Resize."""

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    LANCZOS = "lanczos"
    AREA = "area"


class ErrorKind(str, Enum):
    """Failure kinds reported by the engine."""

    INVALID_PARAMETER = "InvalidParameter"
    OUT_OF_BOUNDS = "OutOfBounds"
    INVALID_COLOR_MODEL = "InvalidColorModel"
