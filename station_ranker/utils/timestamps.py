"""UTC timestamp helpers."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: Optional[datetime], fmt: str = "%Y-%m-%d %H:%M UTC") -> str:
    """Format a datetime for display, converting to UTC first.

    Naive datetimes are assumed to already be UTC. None renders as an empty string.
    """
    if dt is None:
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(fmt)
