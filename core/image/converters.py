"""
Image format conversion utilities.

Handles conversions between raster buffers and the outside world:
- PIL Images (any mode Pillow can decode)
- Encoded image bytes (PNG, JPEG, BMP, TIFF, WebP)
- Base64 encoded strings
- Files on disk
"""

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from core.constants import ErrorMessages, ImageIOConstants
from core.enums import ColorModel
from core.exceptions import ImageDecodeError
from core.raster import RasterBuffer

logger = logging.getLogger(__name__)

# Pillow modes each output format can write without conversion
FORMAT_MODES = {
    "PNG": {"L", "LA", "RGB", "RGBA", "I;16"},
    "JPEG": {"L", "RGB", "CMYK"},
    "BMP": {"L", "RGB", "RGBA"},
    "TIFF": {"L", "LA", "RGB", "RGBA", "CMYK", "I;16"},
    "WEBP": {"RGB", "RGBA"},
}

SIXTEEN_BIT_MODES = ("I;16", "I;16L", "I;16B", "I;16N")


class ImageConverters:
    """Utilities for converting between raster buffers and image formats."""

    @staticmethod
    def pil_to_raster(image: Image.Image) -> RasterBuffer:
        """
        Convert PIL Image to a raster buffer.

        Modes with a matching color model are taken as-is, 16-bit grayscale
        keeps its depth, palette images expand to RGB or RGBA, anything else
        is converted by Pillow first.

        Args:
            image: PIL Image in any mode

        Returns:
            RasterBuffer owning a copy of the pixel data
        """
        mode = image.mode

        if mode in SIXTEEN_BIT_MODES:
            array = np.array(image).astype(np.uint16)
            return RasterBuffer.from_array(array, ColorModel.L)

        if mode not in ImageIOConstants.NATIVE_MODES:
            target = ImageConverters._native_mode_for(image)
            logger.debug(f"Converting {mode} image to {target}")
            image = image.convert(target)

        return RasterBuffer.from_array(np.asarray(image), ColorModel(image.mode))

    @staticmethod
    def raster_to_pil(buffer: RasterBuffer) -> Image.Image:
        """
        Convert a raster buffer to PIL Image.

        16-bit grayscale becomes an "I;16" image. Other 16-bit buffers are
        reduced to 8 bits, since Pillow has no multi-channel 16-bit mode.
        """
        pixels = buffer.pixels
        mode = buffer.color_model.value

        if buffer.dtype == np.uint16:
            if buffer.color_model == ColorModel.L:
                data = np.ascontiguousarray(pixels[:, :, 0], dtype="<u2").tobytes()
                return Image.frombytes("I;16", buffer.size, data)
            pixels = (pixels >> 8).astype(np.uint8)

        return Image.frombytes(mode, buffer.size, np.ascontiguousarray(pixels).tobytes())

    @staticmethod
    def decode_bytes(data: bytes) -> RasterBuffer:
        """
        Decode encoded image bytes.

        Raises:
            ImageDecodeError: If Pillow cannot read the data
        """
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error(f"Failed to decode image: {e}")
            raise ImageDecodeError(ErrorMessages.INVALID_IMAGE_DATA.format(error=e)) from e

        return ImageConverters.pil_to_raster(image)

    @staticmethod
    def encode_bytes(
        buffer: RasterBuffer,
        format: str = ImageIOConstants.DEFAULT_OUTPUT_FORMAT,
        quality: int = ImageIOConstants.DEFAULT_JPEG_QUALITY,
    ) -> bytes:
        """
        Encode a raster buffer.

        Args:
            buffer: Buffer to encode
            format: Image format (PNG, JPEG, BMP, TIFF, WEBP)
            quality: JPEG/WebP quality (1-100, ignored for other formats)

        Returns:
            Encoded image bytes

        Raises:
            ValueError: If the format is not supported
        """
        format = format.upper()
        if format == "JPG":
            format = "JPEG"
        if format not in FORMAT_MODES:
            raise ValueError(
                f"Unsupported output format {format!r}, "
                f"expected one of {ImageIOConstants.ALLOWED_OUTPUT_FORMATS}"
            )

        image = ImageConverters._for_format(ImageConverters.raster_to_pil(buffer), format)

        output = io.BytesIO()
        save_kwargs = {"format": format}

        if format in ("JPEG", "WEBP"):
            save_kwargs["quality"] = quality
        if format == "JPEG":
            save_kwargs["optimize"] = True

        image.save(output, **save_kwargs)
        return output.getvalue()

    @staticmethod
    def to_base64(
        image: Union[RasterBuffer, bytes],
        format: str = ImageIOConstants.DEFAULT_OUTPUT_FORMAT,
        quality: int = ImageIOConstants.DEFAULT_JPEG_QUALITY,
    ) -> str:
        """
        Convert image to base64 string.

        Args:
            image: Raster buffer, or already encoded bytes
            format: Image format used when encoding a buffer
            quality: JPEG quality (1-100, ignored for PNG)

        Returns:
            Base64 encoded string
        """
        # If already bytes, directly encode
        if isinstance(image, bytes):
            return base64.b64encode(image).decode("utf-8")

        return base64.b64encode(ImageConverters.encode_bytes(image, format, quality)).decode(
            "utf-8"
        )

    @staticmethod
    def from_base64(base64_string: str) -> RasterBuffer:
        """
        Convert base64 string to a raster buffer.

        A "data:image/...;base64," prefix is accepted and ignored.

        Raises:
            ImageDecodeError: If the string is not base64 or not an image
        """
        if base64_string.startswith("data:") and "," in base64_string:
            base64_string = base64_string.split(",", 1)[1]

        try:
            image_bytes = base64.b64decode(base64_string, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Failed to decode base64 image: {e}")
            raise ImageDecodeError(ErrorMessages.INVALID_IMAGE_DATA.format(error=e)) from e

        return ImageConverters.decode_bytes(image_bytes)

    @staticmethod
    def load(path: Union[str, Path]) -> RasterBuffer:
        """Read an image file into a raster buffer."""
        return ImageConverters.decode_bytes(Path(path).read_bytes())

    @staticmethod
    def save(
        buffer: RasterBuffer,
        path: Union[str, Path],
        format: Optional[str] = None,
        quality: int = ImageIOConstants.DEFAULT_JPEG_QUALITY,
    ) -> None:
        """
        Write a raster buffer to a file.

        The format is taken from the file extension unless given explicitly.
        """
        path = Path(path)
        if format is None:
            format = ImageConverters.format_for_path(path)
        path.write_bytes(ImageConverters.encode_bytes(buffer, format, quality))

    @staticmethod
    def format_for_path(path: Union[str, Path]) -> str:
        """
        Pillow format name for a file extension.

        Raises:
            ValueError: If the extension is unknown or not a supported output format
        """
        suffix = Path(path).suffix.lower()
        format = Image.registered_extensions().get(suffix)
        if format not in FORMAT_MODES:
            raise ValueError(f"Cannot determine a supported output format for {str(path)!r}")
        return format

    @staticmethod
    def _native_mode_for(image: Image.Image) -> str:
        mode = image.mode
        if mode == "P":
            return "RGBA" if "transparency" in image.info else "RGB"
        if mode in ("1", "I", "F"):
            return "L"
        if mode in ("La", "PA"):
            return "LA" if mode == "La" else "RGBA"
        if "A" in mode or "a" in mode:
            return "RGBA"
        return "RGB"

    @staticmethod
    def _for_format(image: Image.Image, format: str) -> Image.Image:
        """Convert an image to a mode the output format can write."""
        supported = FORMAT_MODES[format]
        if image.mode in supported:
            return image

        if image.mode == "I;16":
            # Scale to 8 bits rather than let Pillow clip
            array = (np.array(image).astype(np.uint16) >> 8).astype(np.uint8)
            image = Image.fromarray(array)
            if image.mode in supported:
                return image

        has_alpha = image.mode in ("LA", "RGBA")
        is_gray = image.mode in ("L", "LA")

        if has_alpha and "RGBA" in supported:
            target = "RGBA"
        elif is_gray and "L" in supported:
            target = "L"
        else:
            target = "RGB"

        logger.debug(f"Converting {image.mode} image to {target} for {format}")
        return image.convert(target)
