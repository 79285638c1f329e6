"""Providers for the caller's location."""

from .base import LocationProvider
from .exceptions import LocationError
from .factory import get_location_provider
from .providers import IPLocationProvider, StaticLocationProvider

__all__ = [
    "LocationProvider",
    "LocationError",
    "StaticLocationProvider",
    "IPLocationProvider",
    "get_location_provider",
]
