"""Normalization of raw station records.

This module provides:
- normalize_record: total function from a raw record to NormalizedRecord | Rejected
- RecordNormalizer: batch normalization with rejection tallies
- Rejected / RejectionReason: tagged rejection values
"""

from .models import NormalizationBatch, NormalizationOutcome, Rejected, RejectionReason
from .service import RecordNormalizer, normalize_record

__all__ = [
    "RecordNormalizer",
    "normalize_record",
    "NormalizationBatch",
    "NormalizationOutcome",
    "Rejected",
    "RejectionReason",
]
