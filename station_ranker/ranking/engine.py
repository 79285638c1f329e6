"""Selection, ordering and truncation of normalized records.

The ranking stages are plain functions so they can be composed and tested
independently:

    select(records, origin, radius_km) -> sorted list of RankedRecord
    top_k(ranked, k)                   -> tuple of the k nearest
    rank_records(raws, origin, ...)    -> RankingResult (normalize + select + top_k)
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from station_ranker.domain.exceptions import NoRecordsInRange, NoValidRecords
from station_ranker.domain.models import NormalizedRecord, RankedRecord, RankingResult, UserLocation
from station_ranker.logging import get_logger
from station_ranker.normalization.service import RecordNormalizer

from .distance import haversine_km

logger = get_logger(__name__, component="ranking")

DEFAULT_TOP_K = 6


def select(
    records: Iterable[NormalizedRecord],
    origin: UserLocation,
    radius_km: Optional[float] = None,
) -> List[RankedRecord]:
    """Annotate records with their distance to ``origin`` and sort ascending.

    Records farther than ``radius_km`` are dropped; a record exactly on the
    bound is kept. The sort is stable, so records at equal distance keep the
    order they arrived in.

    Args:
        records: Normalized records in batch order
        origin: Caller location
        radius_km: Optional inclusive distance bound (None = no bound)

    Returns:
        Ranked records, nearest first

    Raises:
        ValueError: If radius_km is negative
    """
    if radius_km is not None and radius_km < 0:
        raise ValueError(f"radius_km must be non-negative, got {radius_km}")

    ranked = [RankedRecord(record=record, distance_km=haversine_km(origin, record.coordinate))
              for record in records]

    if radius_km is not None:
        ranked = [item for item in ranked if item.distance_km <= radius_km]

    return sorted(ranked, key=lambda item: item.distance_km)


def top_k(ranked: Sequence[RankedRecord], k: int = DEFAULT_TOP_K) -> Tuple[RankedRecord, ...]:
    """Return the first ``k`` records of an already sorted sequence.

    Raises:
        ValueError: If k is negative
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    return tuple(ranked[:k])


def rank_records(
    raw_records: Iterable,
    origin: UserLocation,
    k: int = DEFAULT_TOP_K,
    radius_km: Optional[float] = None,
    normalizer: Optional[RecordNormalizer] = None,
) -> RankingResult:
    """Run the full ranking over one fetched batch.

    Args:
        raw_records: Records as returned by the feed
        origin: Caller location
        k: Maximum number of results
        radius_km: Optional inclusive distance bound
        normalizer: Normalizer to use (default field names when omitted)

    Returns:
        RankingResult with at most k records, nearest first

    Raises:
        NoValidRecords: If no record survives normalization
        NoRecordsInRange: If the final result is empty
        ValueError: If k or radius_km is negative
    """
    normalizer = normalizer or RecordNormalizer()
    batch = normalizer.normalize_batch(raw_records)

    if batch.is_empty:
        raise NoValidRecords(
            f"None of the {batch.total} fetched records had valid coordinates"
        )

    ranked = select(batch.records, origin, radius_km)
    nearest = top_k(ranked, k)

    if not ranked:
        raise NoRecordsInRange(radius_km)
    if not nearest:
        raise NoRecordsInRange(radius_km, "Result bound k=0 leaves no stations to return")

    logger.info(
        f"Ranked {len(nearest)} nearest stations",
        extra={
            "event": "ranking.completed",
            "normalized": len(batch.records),
            "in_range": len(ranked),
            "returned": len(nearest),
            "k": k,
            "radius_km": radius_km,
            "nearest_km": nearest[0].distance_km,
        },
    )

    return RankingResult(
        records=nearest,
        origin=origin,
        k=k,
        radius_km=radius_km,
        fetched_count=batch.total,
        normalized_count=len(batch.records),
        in_range_count=len(ranked),
        rejections=batch.rejections,
    )
