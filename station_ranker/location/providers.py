"""Concrete location providers: fixed coordinates and IP geolocation."""

from typing import Any, Dict

import requests
from pydantic import ValidationError

from station_ranker.domain.models import UserLocation
from station_ranker.logging import get_logger

from .base import LocationProvider
from .exceptions import LocationError

logger = get_logger(__name__, component="location")


class StaticLocationProvider(LocationProvider):
    """Always returns the same coordinates (from config, env or CLI)."""

    name = "static"

    def __init__(self, latitude: float, longitude: float) -> None:
        try:
            self._location = UserLocation(lat=latitude, lon=longitude, source=self.name)
        except ValidationError as e:
            raise LocationError(f"Invalid static location ({latitude}, {longitude})") from e

    def get_location(self) -> UserLocation:
        return self._location


class IPLocationProvider(LocationProvider):
    """Approximates the caller's position from their public IP address.

    Expects an ip-api.com style response::

        {"status": "success", "lat": 40.4165, "lon": -3.70256, "city": "Madrid", ...}

    Accuracy is city-level at best, which is enough to rank stations nearby.
    """

    name = "ip"

    def __init__(self, url: str, timeout: int = 30, user_agent: str = "StationRanker/1.0") -> None:
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def get_location(self) -> UserLocation:
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            raise LocationError(f"IP geolocation timed out after {self.timeout} seconds") from e
        except requests.exceptions.RequestException as e:
            raise LocationError(f"IP geolocation request failed: {e}") from e
        except ValueError as e:
            raise LocationError(f"IP geolocation returned invalid JSON: {e}") from e

        location = self._parse_payload(payload)

        logger.info(
            "Resolved location from IP address",
            extra={
                "event": "location.resolved",
                "provider": self.name,
                "lat": location.lat,
                "lon": location.lon,
                "city": payload.get("city") if isinstance(payload, dict) else None,
            },
        )
        return location

    def _parse_payload(self, payload: Any) -> UserLocation:
        if not isinstance(payload, dict):
            raise LocationError("IP geolocation response is not a JSON object")

        status = payload.get("status")
        if status is not None and status != "success":
            message = payload.get("message", "unknown error")
            raise LocationError(f"IP geolocation failed: {message}")

        return self._to_location(payload)

    def _to_location(self, payload: Dict[str, Any]) -> UserLocation:
        lat = payload.get("lat", payload.get("latitude"))
        lon = payload.get("lon", payload.get("longitude"))
        if lat is None or lon is None:
            raise LocationError("IP geolocation response has no coordinates")

        try:
            return UserLocation(lat=lat, lon=lon, source=self.name)
        except ValidationError as e:
            raise LocationError(f"IP geolocation returned invalid coordinates ({lat}, {lon})") from e
