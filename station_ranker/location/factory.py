"""Factory for location providers."""

from station_ranker.config.models import AdvancedConfig, LocationConfig, LocationType

from .base import LocationProvider
from .exceptions import LocationError
from .providers import IPLocationProvider, StaticLocationProvider


def get_location_provider(
    location_config: LocationConfig, advanced_config: AdvancedConfig
) -> LocationProvider:
    """Build the provider selected by ``location_config.type``.

    Raises:
        LocationError: If the type is unknown or the static coordinates are invalid
    """
    location_type = str(getattr(location_config.type, "value", location_config.type)).lower()

    if location_type == LocationType.STATIC.value:
        return StaticLocationProvider(location_config.latitude, location_config.longitude)

    if location_type == LocationType.IP.value:
        return IPLocationProvider(
            url=location_config.lookup_url,
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
        )

    raise LocationError(f"Unknown location provider type: {location_config.type}")
