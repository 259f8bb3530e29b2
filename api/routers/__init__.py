"""
API Routers for the image operations service
"""

from . import image, system

__all__ = ["image", "system"]
