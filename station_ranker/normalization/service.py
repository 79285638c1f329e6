"""Conversion of raw feed records into validated NormalizedRecords.

The feed writes coordinates with a decimal comma ("40,416775"). That is a
fixed data contract: the comma is rewritten to a point before parsing, and
anything that then fails to parse, or lands outside geographic bounds, is
rejected rather than raised.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from station_ranker.domain.models import (
    LATITUDE_FIELD,
    LONGITUDE_FIELD,
    Coordinate,
    NormalizedRecord,
)
from station_ranker.logging import get_logger
from station_ranker.utils.numbers import parse_locale_decimal

from .models import NormalizationBatch, NormalizationOutcome, Rejected, RejectionReason

logger = get_logger(__name__, component="normalization")


def _read_coordinate_text(
    raw: Mapping, field_name: str, index: int
) -> Union[str, Rejected]:
    value: Any = raw.get(field_name)

    if value is None:
        return Rejected(RejectionReason.MISSING_FIELD, index, field_name, "field absent")
    if not isinstance(value, str):
        return Rejected(
            RejectionReason.NOT_A_STRING, index, field_name, f"got {type(value).__name__}"
        )
    if not value.strip():
        return Rejected(RejectionReason.MISSING_FIELD, index, field_name, "field empty")

    return value


def normalize_record(
    raw: Any,
    index: int = 0,
    latitude_field: str = LATITUDE_FIELD,
    longitude_field: str = LONGITUDE_FIELD,
) -> NormalizationOutcome:
    """Normalize one raw record.

    Args:
        raw: Record as received from the feed
        index: Position of the record in its batch (kept for stable ordering)
        latitude_field: Name of the comma-decimal latitude field
        longitude_field: Name of the comma-decimal longitude field

    Returns:
        NormalizedRecord on success, Rejected otherwise
    """
    if not isinstance(raw, Mapping):
        return Rejected(RejectionReason.NOT_A_MAPPING, index, None, f"got {type(raw).__name__}")

    texts = []
    for field_name in (latitude_field, longitude_field):
        text = _read_coordinate_text(raw, field_name, index)
        if isinstance(text, Rejected):
            return text
        texts.append((field_name, text))

    values = []
    for field_name, text in texts:
        number = parse_locale_decimal(text)
        if number is None:
            return Rejected(RejectionReason.UNPARSABLE, index, field_name, repr(text))
        values.append(number)

    lat, lon = values
    try:
        coordinate = Coordinate(lat=lat, lon=lon)
    except ValidationError:
        return Rejected(
            RejectionReason.OUT_OF_RANGE, index, None, f"lat={lat}, lon={lon}"
        )

    return NormalizedRecord(raw=raw, coordinate=coordinate, index=index)


class RecordNormalizer:
    """Normalizes fetched batches and tallies rejections.

    Rejected records are dropped from the batch. Only an aggregate count per
    reason is reported, through the batch result and a single log line, so a
    sudden rise in rejections stays visible without logging every record.
    """

    def __init__(
        self,
        latitude_field: str = LATITUDE_FIELD,
        longitude_field: str = LONGITUDE_FIELD,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.latitude_field = latitude_field
        self.longitude_field = longitude_field
        self.logger = logger_instance or logger

    def normalize(self, raw: Any, index: int = 0) -> NormalizationOutcome:
        """Normalize a single record using this normalizer's field names."""
        return normalize_record(raw, index, self.latitude_field, self.longitude_field)

    def normalize_batch(self, raws: Iterable[Any]) -> NormalizationBatch:
        """Normalize every record of a batch, preserving batch order.

        Args:
            raws: Raw records in the order the feed returned them

        Returns:
            NormalizationBatch with the surviving records and rejection counts
        """
        batch = NormalizationBatch()

        for index, raw in enumerate(raws):
            batch.total += 1
            outcome = self.normalize(raw, index)

            if isinstance(outcome, Rejected):
                batch.rejections[outcome.reason.value] += 1
                self.logger.debug(
                    "Record rejected",
                    extra={
                        "event": "normalization.record.rejected",
                        "index": outcome.index,
                        "reason": outcome.reason.value,
                        "field": outcome.field_name,
                        "detail": outcome.detail,
                    },
                )
                continue

            batch.records.append(outcome)

        level = logging.WARNING if batch.rejected_count else logging.INFO
        self.logger.log(
            level,
            f"Normalized {len(batch.records)} of {batch.total} records",
            extra={
                "event": "normalization.batch.completed",
                "total": batch.total,
                "normalized": len(batch.records),
                "rejected": batch.rejected_count,
                "rejections": dict(batch.rejections),
            },
        )

        return batch
