"""Core domain models for station ranking.

This module defines the data structures that flow through the pipeline:
- RawRecord: untyped station record exactly as the upstream feed sends it
- Coordinate / UserLocation: validated geographic points
- NormalizedRecord: a raw record that passed coordinate validation
- RankedRecord: a normalized record with its distance to the caller
- RankingResult: the bounded, ordered output of one ranking run
"""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from station_ranker.utils.numbers import parse_locale_decimal

RawRecord = Mapping[str, Any]

# Field names of the Spanish Ministry fuel-price feed (EstacionesTerrestres)
LATITUDE_FIELD = "Latitud"
LONGITUDE_FIELD = "Longitud (WGS84)"
LABEL_FIELD = "Rótulo"
ADDRESS_FIELD = "Dirección"
MUNICIPALITY_FIELD = "Municipio"
PROVINCE_FIELD = "Provincia"
POSTAL_CODE_FIELD = "C.P."
SCHEDULE_FIELD = "Horario"
STATION_ID_FIELD = "IDEESS"
DEFAULT_PRICE_FIELD = "Precio Gasolina 95 E5"


class Coordinate(BaseModel):
    """A validated latitude/longitude pair in decimal degrees.

    Instances can only exist with finite, in-range values; construction
    raises a pydantic ValidationError otherwise.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")


class UserLocation(Coordinate):
    """The caller's position for one ranking request."""

    source: Optional[str] = Field(None, description="Provider that produced the location")

    def same_point(self, other: Optional["UserLocation"]) -> bool:
        """Whether ``other`` refers to the same coordinates, ignoring the source."""
        return other is not None and self.lat == other.lat and self.lon == other.lon


@dataclass(frozen=True)
class NormalizedRecord:
    """A raw record whose coordinates parsed and validated.

    Attributes:
        raw: Read-only view of the original record (all fields pass through)
        coordinate: Parsed station position
        index: Position of the record in the fetched batch
    """

    raw: RawRecord
    coordinate: Coordinate
    index: int = 0

    def __post_init__(self):
        if not isinstance(self.raw, MappingProxyType):
            object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    def text_field(self, name: str) -> Optional[str]:
        """Return a stripped string field, or None when absent or blank."""
        value = self.raw.get(name)
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    @property
    def station_id(self) -> Optional[str]:
        return self.text_field(STATION_ID_FIELD)

    @property
    def label(self) -> Optional[str]:
        return self.text_field(LABEL_FIELD)

    @property
    def address(self) -> Optional[str]:
        return self.text_field(ADDRESS_FIELD)

    @property
    def municipality(self) -> Optional[str]:
        return self.text_field(MUNICIPALITY_FIELD)

    @property
    def province(self) -> Optional[str]:
        return self.text_field(PROVINCE_FIELD)

    @property
    def schedule(self) -> Optional[str]:
        return self.text_field(SCHEDULE_FIELD)

    def price(self, price_field: str = DEFAULT_PRICE_FIELD) -> Optional[float]:
        """Parse a comma-decimal price field; None when absent or unparsable."""
        return parse_locale_decimal(self.raw.get(price_field))


@dataclass(frozen=True)
class RankedRecord:
    """A normalized record annotated with its distance to one origin."""

    record: NormalizedRecord
    distance_km: float

    @property
    def coordinate(self) -> Coordinate:
        return self.record.coordinate

    @property
    def index(self) -> int:
        return self.record.index


@dataclass(frozen=True)
class RankingResult:
    """Nearest stations for one origin, ascending by distance.

    Attributes:
        records: At most ``k`` ranked records; ties keep batch order
        origin: Location the distances were computed against
        k: Requested bound
        radius_km: Radius filter that was applied (None = unbounded)
        fetched_count: Records in the raw batch
        normalized_count: Records that passed normalization
        in_range_count: Normalized records within the radius (all when unbounded)
        rejections: Rejected-record counts keyed by reason value
    """

    records: Tuple[RankedRecord, ...]
    origin: UserLocation
    k: int
    radius_km: Optional[float] = None
    fetched_count: int = 0
    normalized_count: int = 0
    in_range_count: int = 0
    rejections: Counter = field(default_factory=Counter)

    @property
    def rejected_count(self) -> int:
        return sum(self.rejections.values())

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
