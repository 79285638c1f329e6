"""Builders for raw station records in the feed's wire format."""

import math
from typing import Any, Dict, Union

EARTH_RADIUS_KM = 6371.0

# Origin used by the ranking scenarios
ORIGIN_LAT = 40.0
ORIGIN_LON = -3.0


def comma_decimal(value: float, places: int = 6) -> str:
    """Format a float the way the feed does: decimal comma."""
    return f"{value:.{places}f}".replace(".", ",")


def north_of(lat: float, km: float) -> float:
    """Latitude exactly ``km`` kilometres north of ``lat`` along a meridian."""
    return lat + math.degrees(km / EARTH_RADIUS_KM)


def make_raw(
    lat: Union[float, str, None],
    lon: Union[float, str, None],
    label: str = "REPSOL",
    **extra: Any,
) -> Dict[str, Any]:
    """Build a raw record; floats are written with a decimal comma, None omits the field."""
    record: Dict[str, Any] = {
        "IDEESS": extra.pop("station_id", "1234"),
        "Rótulo": label,
        "Dirección": extra.pop("address", "CALLE MAYOR, 1"),
        "Municipio": extra.pop("municipality", "Madrid"),
        "Provincia": extra.pop("province", "MADRID"),
        "Horario": extra.pop("schedule", "L-D: 24H"),
        "Precio Gasolina 95 E5": extra.pop("price", "1,659"),
    }
    if lat is not None:
        record["Latitud"] = comma_decimal(lat) if isinstance(lat, float) else lat
    if lon is not None:
        record["Longitud (WGS84)"] = comma_decimal(lon) if isinstance(lon, float) else lon
    record.update(extra)
    return record
