"""
Enum conversion utilities.

Provides standardized methods for parsing strings into enums,
with support for case-insensitive parsing and fallback defaults.
"""

from typing import Any, Optional, Type, TypeVar

T = TypeVar("T")


def parse_enum(value: Any, enum_class: Type[T], default: Optional[T], normalize: bool = False):
    """
    Parse value to enum with fallback to default.

    Args:
        value: Value to parse (string, enum, or None)
        enum_class: Enum class to parse to
        default: Value returned if parsing fails
        normalize: Whether to lowercase string before parsing
            (for case-insensitive matching)

    Returns:
        Parsed enum value or default

    Example:
        >>> parse_enum("Nearest", ResizeFilter, None, normalize=True)
        >>> # Returns ResizeFilter.NEAREST for "nearest", "Nearest", "NEAREST"
    """
    # Already an enum instance
    if isinstance(value, enum_class):
        return value

    # None or missing value
    if value is None:
        return default

    # String value - try to parse
    try:
        str_value = value.lower() if normalize else value
        return enum_class(str_value)
    except (ValueError, AttributeError):
        return default


def enum_values(enum_class: Type[Any]) -> list:
    """All string values of an enum, in declaration order."""
    return [member.value for member in enum_class]
