"""Domain models and errors for station ranking."""

from .exceptions import (
    FetchFailed,
    LocationUnavailable,
    MalformedBatch,
    NoRecordsInRange,
    NoValidRecords,
    RankingError,
)
from .models import (
    Coordinate,
    NormalizedRecord,
    RankedRecord,
    RankingResult,
    RawRecord,
    UserLocation,
)

__all__ = [
    "Coordinate",
    "UserLocation",
    "RawRecord",
    "NormalizedRecord",
    "RankedRecord",
    "RankingResult",
    "RankingError",
    "LocationUnavailable",
    "FetchFailed",
    "MalformedBatch",
    "NoValidRecords",
    "NoRecordsInRange",
]
