"""Parsing of numbers written with a decimal comma.

The fuel-price feed publishes every decimal (coordinates and prices) with a
comma as the fractional separator, e.g. ``"40,416775"`` or ``"1,629"``.
"""

import math
import re
from typing import Any, Optional

# Optional sign, ASCII digits, at most one fractional part.
DECIMAL_PATTERN = re.compile(r"[+-]?\d+(?:[.,]\d+)?", re.ASCII)


def parse_locale_decimal(value: Any) -> Optional[float]:
    """Parse a comma-decimal string into a finite float.

    Only plain decimals are accepted: no exponents, digit separators
    (``_``, thousands points) or spelled-out values such as ``"nan"``.
    Anything else returns None instead of raising.

    Args:
        value: Field value from a raw record

    Returns:
        Parsed float, or None for non-strings, blanks, garbage and non-finite values

    Examples:
        >>> parse_locale_decimal("40,4168")
        40.4168
        >>> parse_locale_decimal("4_0,5") is None
        True
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        return None

    number = float(text.replace(",", ".", 1))

    # Overlong digit strings overflow to inf.
    if not math.isfinite(number):
        return None

    return number
