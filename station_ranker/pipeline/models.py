"""Data models for ranking run tracking and reporting."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from station_ranker.domain.exceptions import RankingError
from station_ranker.domain.models import RankingResult, UserLocation


@dataclass
class RankingRunResult:
    """
    Outcome of one pipeline run.

    Exactly one of ``result`` and ``error`` is set for a finished run.

    Attributes:
        run_id: Unique identifier for the run (also in every log line)
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        generation: Generation of the ticket the run was started with (0 = untracked)
        location: Location the run ranked against, if one was obtained
        result: Ranking result on success
        error: Terminal failure, if any
        superseded: A newer run was started before this one finished; discarded
        duration_seconds: Wall-clock duration
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    generation: int = 0
    location: Optional[UserLocation] = None
    result: Optional[RankingResult] = None
    error: Optional[RankingError] = None
    superseded: bool = False
    duration_seconds: float = 0.0

    def __post_init__(self):
        if self.duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.duration_seconds = delta.total_seconds()

    @property
    def ok(self) -> bool:
        return self.result is not None and self.error is None

    @property
    def message(self) -> str:
        """Single user-visible message describing the run."""
        if self.error is not None:
            return self.error.user_message
        if self.result is not None:
            count = len(self.result)
            return f"Found {count} nearby station{'s' if count != 1 else ''}."
        return "No result."
