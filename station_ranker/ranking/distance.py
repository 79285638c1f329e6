"""Great-circle distance on a spherical Earth."""

import math

from station_ranker.domain.models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Haversine distance between two coordinates, in kilometres.

    Uses the ``atan2`` form, which stays well-defined for near-identical and
    near-antipodal points. ``h`` is clamped to [0, 1] so rounding can never
    push a square root out of its domain.

    Args:
        a: First point
        b: Second point
        radius_km: Sphere radius (mean Earth radius by default)

    Returns:
        Non-negative distance; exactly 0.0 when a and b coincide
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lon - a.lon)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    h = min(1.0, max(0.0, h))

    return 2.0 * radius_km * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
