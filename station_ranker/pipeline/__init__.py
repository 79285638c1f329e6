"""Pipeline orchestration: one ranking run per location, newest run wins."""

from .generation import RunGenerationTracker, RunTicket
from .models import RankingRunResult
from .runner import RankingPipeline, RankingSession

__all__ = [
    "RankingPipeline",
    "RankingSession",
    "RankingRunResult",
    "RunGenerationTracker",
    "RunTicket",
]
