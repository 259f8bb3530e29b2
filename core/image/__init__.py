"""
Image codec utilities.

- converters: Format conversions (PIL, encoded bytes, base64, files)
"""

from core.image.converters import ImageConverters

__all__ = ["ImageConverters"]
