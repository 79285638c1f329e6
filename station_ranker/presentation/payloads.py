"""Template and JSON payloads built from ranking run results."""

from typing import Any, Dict, List

from station_ranker.domain.models import DEFAULT_PRICE_FIELD, RankedRecord
from station_ranker.pipeline.models import RankingRunResult
from station_ranker.utils.timestamps import format_timestamp


def build_station_payload(
    ranked: RankedRecord, position: int, price_field: str = DEFAULT_PRICE_FIELD
) -> Dict[str, Any]:
    """Flatten one ranked record into display fields.

    Args:
        ranked: Ranked record
        position: 1-based rank
        price_field: Raw field holding the price to display

    Returns:
        Dictionary with rank, display fields, coordinates and distance
    """
    record = ranked.record
    return {
        "rank": position,
        "station_id": record.station_id,
        "label": record.label or "(unnamed station)",
        "address": record.address,
        "municipality": record.municipality,
        "province": record.province,
        "schedule": record.schedule,
        "price": record.price(price_field),
        "lat": record.coordinate.lat,
        "lon": record.coordinate.lon,
        "distance_km": round(ranked.distance_km, 3),
    }


def build_result_context(
    run_result: RankingRunResult, price_field: str = DEFAULT_PRICE_FIELD
) -> Dict[str, Any]:
    """Build the template context for a run result.

    Returns:
        Dictionary with:
        - ok, message: Outcome and its single user-visible message
        - error_type: Exception class name for failures, else None
        - origin: {"lat", "lon", "source"} or None
        - stations: List of station payloads, nearest first
        - price_field: Label of the displayed price
        - k, radius_km: Bounds that were applied
        - fetched, normalized, rejected: Batch diagnostics
        - generated_at: Display timestamp of the run end
    """
    result = run_result.result
    stations: List[Dict[str, Any]] = []
    if result is not None:
        stations = [
            build_station_payload(ranked, position, price_field)
            for position, ranked in enumerate(result.records, start=1)
        ]

    location = run_result.location
    return {
        "ok": run_result.ok,
        "message": run_result.message,
        "error_type": type(run_result.error).__name__ if run_result.error else None,
        "origin": (
            {"lat": location.lat, "lon": location.lon, "source": location.source}
            if location is not None
            else None
        ),
        "stations": stations,
        "price_field": price_field,
        "k": result.k if result else None,
        "radius_km": result.radius_km if result else None,
        "fetched": result.fetched_count if result else None,
        "normalized": result.normalized_count if result else None,
        "rejected": result.rejected_count if result else None,
        "rejections": dict(result.rejections) if result else {},
        "generated_at": format_timestamp(run_result.run_finished_at),
        "run_id": run_result.run_id,
    }
