"""Environment variable loading and validation."""

import os
from typing import Optional, Tuple

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Settings read from the process environment."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        source_url: Optional[str] = None,
        location: Optional[Tuple[float, float]] = None,
    ):
        self.log_level = log_level
        self.environment = environment or "local"
        self.source_url = source_url
        self.location = location


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label stamped on log records (default: local)
    - STATION_RANKER_SOURCE_URL: Override source.base_url
    - STATION_RANKER_LOCATION: Fixed caller location as "lat,lon" (point decimals)

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If any variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")
    source_url = os.getenv("STATION_RANKER_SOURCE_URL")
    location_str = os.getenv("STATION_RANKER_LOCATION")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if source_url is not None and not source_url.strip():
        errors.append("STATION_RANKER_SOURCE_URL is set but empty")

    location = None
    if location_str:
        try:
            location = parse_location_string(location_str)
        except ValueError as e:
            errors.append(f"Invalid STATION_RANKER_LOCATION: {e}")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the variables in your .env file",
                "STATION_RANKER_LOCATION must look like '40.4168,-3.7038'",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level.upper() if log_level else None,
        environment=environment,
        source_url=source_url.strip() if source_url else None,
        location=location,
    )


def parse_location_string(value: str) -> Tuple[float, float]:
    """
    Parse "lat,lon" into a validated (lat, lon) tuple.

    Raises:
        ValueError: If the value is malformed or out of range
    """
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected 'lat,lon', got '{value}'")

    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"coordinates must be numbers, got '{value}'") from None

    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude {lat} is outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"longitude {lon} is outside [-180, 180]")

    return lat, lon
