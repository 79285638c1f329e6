"""Test helper utilities for Station Ranker tests."""

from .fixture_adapter import FailingLocationProvider, StaticAdapter, load_fixture_payload
from .records import (
    EARTH_RADIUS_KM,
    ORIGIN_LAT,
    ORIGIN_LON,
    comma_decimal,
    make_raw,
    north_of,
)

__all__ = [
    "StaticAdapter",
    "FailingLocationProvider",
    "load_fixture_payload",
    "make_raw",
    "comma_decimal",
    "north_of",
    "EARTH_RADIUS_KM",
    "ORIGIN_LAT",
    "ORIGIN_LON",
]
