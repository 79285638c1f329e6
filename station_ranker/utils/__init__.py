"""Utility functions for decimal parsing and time handling."""

from .numbers import parse_locale_decimal
from .timestamps import format_timestamp, utc_now

__all__ = [
    "parse_locale_decimal",
    "format_timestamp",
    "utc_now",
]
