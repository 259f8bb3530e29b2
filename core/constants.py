"""
Constants and configuration values for the image operations engine.
Centralizes all magic numbers and configuration constants.
"""

from core.enums import ResizeFilter


# Raster Constants
class RasterConstants:
    """Constants related to raster buffers."""

    # Supported sample types
    SUPPORTED_DTYPES = ("uint8", "uint16")

    # Default fill value for new buffers
    DEFAULT_FILL_VALUE = 0


# Color Constants
class ColorConstants:
    """Constants for color transforms."""

    # Rec. 709 luma coefficients (R, G, B)
    LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

    # Hue wheel
    FULL_TURN_DEGREES = 360.0


# Filtering Constants
class FilterConstants:
    """Constants for convolution based transforms."""

    KERNEL_3X3_SIZE = 9
    DEFAULT_UNSHARPEN_AMOUNT = 1.0
    DEFAULT_UNSHARPEN_THRESHOLD = 0
    # Keeps the Gaussian kernel size OpenCV derives from sigma in range
    MAX_SIGMA = 1000.0


# Resize Constants
class ResizeConstants:
    """Constants for resampling."""

    # Used when neither the Resize step nor a SetResizeFilter step chose one
    DEFAULT_FILTER = ResizeFilter.LINEAR
    DEFAULT_PRESERVE_ASPECT = True


# Image I/O Constants
class ImageIOConstants:
    """Constants for decoding and encoding at the front-ends."""

    DEFAULT_OUTPUT_FORMAT = "PNG"
    DEFAULT_JPEG_QUALITY = 85
    ALLOWED_OUTPUT_FORMATS = ["PNG", "JPEG", "BMP", "TIFF", "WEBP"]

    # Pillow modes decoded as-is
    NATIVE_MODES = ["L", "LA", "RGB", "RGBA", "CMYK"]


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    DEFAULT_MAX_UPLOAD_SIZE_MB = 50
    DEFAULT_MAX_IMAGE_PIXELS = 64 * 1024 * 1024


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Batch processing (CLI)
    DEFAULT_JOBS = 1
    MAX_JOBS = 32


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Raster errors
    PIXEL_OUT_OF_BOUNDS = "Pixel ({x}, {y}) is outside the {width}x{height} buffer"
    INVALID_DIMENSIONS = "Buffer dimensions must be positive, got {width}x{height}"
    CHANNEL_MISMATCH = "Expected {expected} channel values, got {actual}"

    # Parameter errors
    NEGATIVE_PARAMETER = "{param} must be >= 0, got {value}"
    NON_FINITE_PARAMETER = "{param} must be a finite number, got {value}"
    KERNEL_SIZE = "filter3x3 requires exactly 9 weights, got {count}"
    SIGMA_TOO_LARGE = "{param} must be <= {limit}, got {value}"

    # Crop errors
    CROP_EMPTY = "Crop rectangle must have positive size, got {width}x{height}"
    CROP_NEGATIVE_ORIGIN = "Crop origin must be non-negative, got ({x}, {y})"
    CROP_OUT_OF_BOUNDS = (
        "Crop rectangle [x={x}, y={y}, width={width}, height={height}] "
        "exceeds the {image_width}x{image_height} buffer"
    )

    # Resize errors
    RESIZE_NO_TARGET = "resize requires a target width or height"
    RESIZE_NON_POSITIVE = "resize {param} must be > 0, got {value}"
    RESIZE_COMPUTED_ZERO = (
        "resize of {width}x{height} to {param}={value} with preserved aspect "
        "ratio gives a zero {other}"
    )

    # Color model errors
    NO_LUMINANCE = "Color model {model} has no luminance mapping"
    NO_HUE = "Color model {model} has no hue representation"

    # Front-end errors
    INVALID_IMAGE_DATA = "Could not decode image data: {error}"
    IMAGE_TOO_LARGE = "Image of {pixels} pixels exceeds the limit of {limit} pixels"
    UPLOAD_TOO_LARGE = "Upload of {size_mb:.1f} MB exceeds the limit of {limit_mb} MB"
