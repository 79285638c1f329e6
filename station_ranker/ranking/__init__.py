"""Distance computation and proximity ranking."""

from .distance import EARTH_RADIUS_KM, haversine_km
from .engine import DEFAULT_TOP_K, rank_records, select, top_k

__all__ = [
    "EARTH_RADIUS_KM",
    "DEFAULT_TOP_K",
    "haversine_km",
    "select",
    "top_k",
    "rank_records",
]
