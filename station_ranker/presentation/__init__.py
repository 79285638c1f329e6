"""Presentation of ranking results."""

from .payloads import build_result_context, build_station_payload
from .templates import PresentationError, ResultRenderer

__all__ = [
    "ResultRenderer",
    "PresentationError",
    "build_result_context",
    "build_station_payload",
]
