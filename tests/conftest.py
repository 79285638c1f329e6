"""Shared fixtures for Station Ranker tests."""

import pytest

from station_ranker.domain.models import UserLocation
from station_ranker.location.providers import StaticLocationProvider
from station_ranker.logging.context import clear_log_context
from tests.helpers import ORIGIN_LAT, ORIGIN_LON, make_raw, north_of


@pytest.fixture(autouse=True)
def clean_log_context():
    """Isolate logging context between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the app reads."""
    for name in ("LOG_LEVEL", "ENVIRONMENT", "STATION_RANKER_SOURCE_URL", "STATION_RANKER_LOCATION"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def origin():
    """Caller location used by the ranking scenarios."""
    return UserLocation(lat=ORIGIN_LAT, lon=ORIGIN_LON, source="static")


@pytest.fixture
def scenario_records():
    """Three stations due north of the origin at 1 km, 5 km and 3 km, in that batch order."""
    return [
        make_raw(north_of(ORIGIN_LAT, 1.0), ORIGIN_LON, label="ONE_KM", station_id="1"),
        make_raw(north_of(ORIGIN_LAT, 5.0), ORIGIN_LON, label="FIVE_KM", station_id="5"),
        make_raw(north_of(ORIGIN_LAT, 3.0), ORIGIN_LON, label="THREE_KM", station_id="3"),
    ]


@pytest.fixture
def location_provider():
    return StaticLocationProvider(ORIGIN_LAT, ORIGIN_LON)
