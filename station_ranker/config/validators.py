"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dictionary for settings that are valid but suspicious.

    Args:
        config_dict: Raw configuration dictionary (before model validation)

    Returns:
        List of warning messages
    """
    warning_messages = []

    ranking = config_dict.get("ranking", {})
    if isinstance(ranking, dict):
        top_k = ranking.get("top_k")
        if isinstance(top_k, int) and top_k > 50:
            warning_messages.append(
                f"Large ranking.top_k ({top_k}) makes the result list hard to read"
            )

        radius_km = ranking.get("radius_km")
        if isinstance(radius_km, (int, float)) and radius_km > 1000:
            warning_messages.append(
                f"ranking.radius_km ({radius_km}) is larger than mainland Spain; "
                "the bound will rarely exclude anything"
            )

    location = config_dict.get("location", {})
    if isinstance(location, dict):
        if location.get("latitude") == 0 and location.get("longitude") == 0:
            warning_messages.append(
                "location is (0, 0); this is usually a missing value rather than a real position"
            )

    watch_interval = config_dict.get("watch_interval")
    if isinstance(watch_interval, str):
        try:
            if parse_duration(watch_interval) < 60:
                warning_messages.append(
                    f"Short watch_interval ({watch_interval}) polls the location provider very often"
                )
        except DurationParseError:
            # Reported as an error by model validation
            pass

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
