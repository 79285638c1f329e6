"""Duration parsing for interval settings such as ``watch_interval``."""

import re

# Watch mode polls the location provider; sub-10s polling only burns requests
MIN_INTERVAL_SECONDS = 10
MAX_INTERVAL_SECONDS = 86400

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_ISO_PATTERN = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
)
_HUMAN_PATTERN = re.compile(r"(\d+)\s*([smhd])")


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed or is out of range."""


def parse_duration(duration_str: str) -> int:
    """Parse a duration string to whole seconds.

    Accepts human-readable values ("30s", "5m", "1h30m") and ISO-8601
    durations ("PT5M", "P1D").

    Raises:
        DurationParseError: If the string is empty, malformed, or zero

    Examples:
        >>> parse_duration("5m")
        300
        >>> parse_duration("PT1H")
        3600
    """
    text = duration_str.strip()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    if text.upper().startswith("P"):
        seconds = _parse_iso8601(text.upper())
    else:
        seconds = _parse_human(text.lower())

    if seconds == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return seconds


def _parse_iso8601(text: str) -> int:
    match = _ISO_PATTERN.match(text)
    if not match or text in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{text}'. "
            "Expected format like 'PT30S', 'PT5M' or 'PT1H'"
        )

    days, hours, minutes, seconds = match.groups()
    total = int(days or 0) * 86400 + int(hours or 0) * 3600 + int(minutes or 0) * 60
    if seconds:
        total += int(float(seconds))
    return total


def _parse_human(text: str) -> int:
    matches = _HUMAN_PATTERN.findall(text)
    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{text}'. Expected format like '30s', '5m', '1h' or '1h30m'"
        )

    # Reject leftovers such as "5 minutes" or "5m!"
    consumed = "".join(f"{num}{unit}" for num, unit in matches)
    if consumed != re.sub(r"\s+", "", text):
        raise DurationParseError(
            f"Invalid characters in duration: '{text}'. "
            "Use only digits and units: s, m, h, d"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in matches)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = MIN_INTERVAL_SECONDS,
    max_seconds: int = MAX_INTERVAL_SECONDS,
) -> None:
    """Raise DurationParseError unless min_seconds <= duration_seconds <= max_seconds."""
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Interval too short: {duration_seconds}s. Minimum is {min_seconds}s."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Interval too long: {duration_seconds}s. Maximum is {max_seconds}s."
        )
