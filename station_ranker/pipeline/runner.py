"""Pipeline orchestration for ranking nearby stations."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional
from uuid import uuid4

from station_ranker.adapters.base import BaseAdapter
from station_ranker.adapters.exceptions import AdapterError, AdapterResponseError
from station_ranker.adapters.factory import get_adapter
from station_ranker.config.models import AppConfig
from station_ranker.domain.exceptions import (
    FetchFailed,
    LocationUnavailable,
    MalformedBatch,
    RankingError,
)
from station_ranker.domain.models import RankingResult, UserLocation
from station_ranker.location.base import LocationProvider
from station_ranker.location.exceptions import LocationError
from station_ranker.logging import get_logger
from station_ranker.logging.context import log_context
from station_ranker.normalization.service import RecordNormalizer
from station_ranker.ranking.engine import rank_records
from station_ranker.utils.timestamps import utc_now

from .generation import RunGenerationTracker, RunTicket
from .models import RankingRunResult

logger = get_logger(__name__, component="pipeline")


class RankingPipeline:
    """
    Runs location -> fetch -> normalize -> select -> top-K for one request.

    Every terminal failure is captured on the returned RankingRunResult
    instead of propagating, so a caller always gets one outcome with one
    user-visible message. The pipeline never retries.
    """

    def __init__(
        self,
        app_config: AppConfig,
        location_provider: LocationProvider,
        adapter: Optional[BaseAdapter] = None,
        normalizer: Optional[RecordNormalizer] = None,
    ):
        """
        Initialize the ranking pipeline.

        Args:
            app_config: Application configuration
            location_provider: Source of the caller's location
            adapter: Station data adapter (built from app_config.source when omitted)
            normalizer: Record normalizer (built from app_config.source when omitted)
        """
        self.app_config = app_config
        self.location_provider = location_provider
        self.adapter = adapter or get_adapter(app_config.source, app_config.advanced)
        self.normalizer = normalizer or RecordNormalizer(
            latitude_field=app_config.source.latitude_field,
            longitude_field=app_config.source.longitude_field,
        )

    def acquire_location(self) -> UserLocation:
        """Ask the provider for the caller's location.

        Raises:
            LocationUnavailable: If the provider fails
        """
        try:
            return self.location_provider.get_location()
        except LocationError as e:
            raise LocationUnavailable(str(e)) from e

    def fetch(self) -> list:
        """Fetch the raw batch.

        Raises:
            MalformedBatch: If the payload lacks the records collection
            FetchFailed: On any other adapter failure
        """
        try:
            return self.adapter.fetch_records(self.app_config.source)
        except AdapterResponseError as e:
            raise MalformedBatch(str(e)) from e
        except AdapterError as e:
            raise FetchFailed(str(e)) from e

    def rank(self, location: UserLocation) -> RankingResult:
        """Fetch and rank against ``location``, raising on terminal failure."""
        raw_records = self.fetch()
        return rank_records(
            raw_records,
            location,
            k=self.app_config.ranking.top_k,
            radius_km=self.app_config.ranking.radius_km,
            normalizer=self.normalizer,
        )

    def run(
        self,
        location: Optional[UserLocation] = None,
        ticket: Optional[RunTicket] = None,
    ) -> RankingRunResult:
        """
        Execute one ranking run.

        Args:
            location: Caller location; acquired from the provider when omitted
            ticket: Generation ticket; when given, the result is published to
                its tracker only if no newer run has started in the meantime

        Returns:
            RankingRunResult (never raises for ranking failures)
        """
        run_id = uuid4().hex
        run_started_at = utc_now()
        generation = ticket.generation if ticket else 0
        result: Optional[RankingResult] = None
        error: Optional[RankingError] = None

        with log_context(run_id=run_id, generation=generation):
            logger.info(
                "Ranking run started",
                extra={
                    "event": "pipeline.run.started",
                    "location_supplied": location is not None,
                },
            )

            try:
                if location is None:
                    location = self.acquire_location()
                result = self.rank(location)
            except RankingError as e:
                error = e
                logger.warning(
                    f"Ranking run failed: {e}",
                    extra={
                        "event": "pipeline.run.failed",
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )

            run_result = RankingRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                generation=generation,
                location=location,
                result=result,
                error=error,
            )

            if ticket is not None and not ticket.publish(run_result):
                run_result.superseded = True
                logger.info(
                    "Discarding result of superseded run",
                    extra={
                        "event": "pipeline.run.superseded",
                        "current_generation": ticket.tracker.current_generation,
                    },
                )
                return run_result

            logger.info(
                "Ranking run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "ok": run_result.ok,
                    "duration_ms": int(run_result.duration_seconds * 1000),
                    "returned": len(result) if result else 0,
                    "rejected": result.rejected_count if result else None,
                },
            )

            return run_result


class RankingSession:
    """
    Owns the generation tracker for one caller and runs rankings in the background.

    Submitting a new location supersedes any run still in flight: only the
    newest run's result becomes ``latest`` and reaches ``on_result``.
    Separate sessions share nothing, so several callers can rank concurrently.
    """

    def __init__(
        self,
        pipeline: RankingPipeline,
        on_result: Optional[Callable[[RankingRunResult], None]] = None,
        max_workers: int = 2,
    ):
        self.pipeline = pipeline
        self.on_result = on_result
        self.session_id = uuid4().hex[:8]
        self.tracker = RunGenerationTracker()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ranking")
        self._location_lock = threading.Lock()
        self._notify_lock = threading.RLock()
        self._last_location: Optional[UserLocation] = None

    @property
    def latest(self) -> Optional[RankingRunResult]:
        """Newest published run result, or None before the first one."""
        return self.tracker.latest

    def submit(self, location: Optional[UserLocation] = None) -> "Future[RankingRunResult]":
        """Start a new run in the background, superseding earlier ones."""
        ticket = self.tracker.begin()
        return self._executor.submit(self._run, location, ticket)

    def refresh(self) -> Optional["Future[RankingRunResult]"]:
        """
        Re-rank if the caller has moved.

        Acquires the location once. A failure is published as a terminal
        result for a new generation and forgets the last location, so the
        next successful fix always starts a run. An unchanged location starts
        nothing.

        Returns:
            Future of the new run, or None if no run was started
        """
        with log_context(session_id=self.session_id):
            try:
                location = self.pipeline.acquire_location()
            except LocationUnavailable as e:
                self._publish_location_failure(e)
                return None

            with self._location_lock:
                if location.same_point(self._last_location):
                    logger.debug(
                        "Location unchanged, skipping run",
                        extra={"event": "session.location.unchanged"},
                    )
                    return None
                self._last_location = location

            logger.info(
                "Location changed, starting run",
                extra={"event": "session.location.changed", "lat": location.lat, "lon": location.lon},
            )
            return self.submit(location)

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _publish_location_failure(self, error: LocationUnavailable) -> None:
        with self._location_lock:
            self._last_location = None
            ticket = self.tracker.begin()

        now = utc_now()
        run_result = RankingRunResult(
            run_id=uuid4().hex,
            run_started_at=now,
            run_finished_at=now,
            generation=ticket.generation,
            error=error,
        )
        logger.warning(
            f"Location unavailable: {error}",
            extra={"event": "session.location.unavailable", "generation": ticket.generation},
        )
        if ticket.publish(run_result):
            self._notify(run_result, ticket)

    def _run(self, location: Optional[UserLocation], ticket: RunTicket) -> RankingRunResult:
        with log_context(session_id=self.session_id):
            run_result = self.pipeline.run(location=location, ticket=ticket)
            if not run_result.superseded:
                self._notify(run_result, ticket)
        return run_result

    def _notify(self, run_result: RankingRunResult, ticket: RunTicket) -> None:
        """Deliver a result to on_result unless a newer run has started since it was published."""
        if self.on_result is None:
            return
        with self._notify_lock:
            if not ticket.is_current():
                logger.debug(
                    "Skipping callback for superseded result",
                    extra={"event": "session.callback.superseded", "generation": ticket.generation},
                )
                return
            try:
                self.on_result(run_result)
            except Exception as e:
                logger.error(
                    f"Result callback failed: {e}",
                    extra={"event": "session.callback.failed", "error": str(e)},
                    exc_info=True,
                )
