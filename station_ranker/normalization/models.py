"""Data models for the normalization layer.

Normalization is a total function: each raw record yields either a
NormalizedRecord or a Rejected value carrying the reason. Nothing raises.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from station_ranker.domain.models import NormalizedRecord


class RejectionReason(str, Enum):
    """Why a raw record was dropped."""

    NOT_A_MAPPING = "not_a_mapping"
    MISSING_FIELD = "missing_field"
    NOT_A_STRING = "not_a_string"
    UNPARSABLE = "unparsable"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class Rejected:
    """A record that failed normalization.

    Attributes:
        reason: Rejection category
        index: Position of the record in the fetched batch
        field_name: Coordinate field that caused the rejection, when known
        detail: Short human-readable explanation for debug logs
    """

    reason: RejectionReason
    index: int = 0
    field_name: Optional[str] = None
    detail: str = ""


NormalizationOutcome = Union[NormalizedRecord, Rejected]


@dataclass
class NormalizationBatch:
    """Outcome of normalizing a whole fetched batch.

    Attributes:
        records: Normalized records in original batch order
        rejections: Count of rejected records per reason
        total: Number of raw records examined
    """

    records: List[NormalizedRecord] = field(default_factory=list)
    rejections: Counter = field(default_factory=Counter)
    total: int = 0

    @property
    def rejected_count(self) -> int:
        return sum(self.rejections.values())

    @property
    def is_empty(self) -> bool:
        return not self.records
