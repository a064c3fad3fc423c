"""Utility functions for Campus Match."""

from campus_match.utils.normalize import (
    MalformedValueError,
    coerce_flag,
    coerce_number,
    coerce_range,
    coerce_string_set,
    normalize_text,
)

__all__ = [
    "MalformedValueError",
    "coerce_flag",
    "coerce_number",
    "coerce_range",
    "coerce_string_set",
    "normalize_text",
]
