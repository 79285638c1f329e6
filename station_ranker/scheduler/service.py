"""Watch mode: poll the caller's location and re-rank when it changes."""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from station_ranker.logging import get_logger

logger = get_logger(__name__, component="scheduler")

JOB_ID = "location-poll"


class WatchService:
    """
    Wraps APScheduler to call a refresh callable at a fixed interval.

    The callable (normally RankingSession.refresh) only acquires the location
    and hands real work to the session's own workers, so polls never overlap
    with each other while rankings for a newer location can still supersede
    older ones.
    """

    def __init__(
        self,
        refresh_callable: Callable[[], object],
        interval_seconds: int,
        shutdown_event: Optional[threading.Event] = None,
    ):
        """
        Args:
            refresh_callable: Function called on every tick
            interval_seconds: Seconds between ticks
            shutdown_event: Event set when the service shuts down
        """
        self.refresh_callable = refresh_callable
        self.interval_seconds = interval_seconds
        self.shutdown_event = shutdown_event

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,
                "coalesce": True,
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def start(self) -> None:
        """Register the polling job and start the scheduler; the first tick is immediate."""
        trigger = IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc)

        next_run = datetime.now(timezone.utc)
        self.scheduler.add_job(
            func=self.refresh_callable,
            trigger=trigger,
            id=JOB_ID,
            name="Location poll",
            replace_existing=True,
            next_run_time=next_run,
        )
        self.scheduler.start()

        logger.info(
            f"Watch mode started with interval: {self.interval_seconds} seconds",
            extra={
                "event": "scheduler.started",
                "interval_seconds": self.interval_seconds,
                "next_run_time": next_run.isoformat(),
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        """Stop polling and signal the shutdown event."""
        logger.info(
            "Shutting down watch mode",
            extra={"event": "scheduler.stopping", "wait_for_jobs": wait},
        )

        if self.is_running():
            self.scheduler.shutdown(wait=wait)

        if self.shutdown_event:
            self.shutdown_event.set()

        logger.info("Watch mode stopped", extra={"event": "scheduler.stopped"})

    def is_running(self) -> bool:
        return self.scheduler.running
