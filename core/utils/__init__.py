"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers (timer)
- enum_converter: Enum parsing and conversion
"""

from .decorators import timer
from .enum_converter import enum_values, parse_enum

__all__ = ["timer", "enum_values", "parse_enum"]
