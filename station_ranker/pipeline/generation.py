"""Generation counting for supersede-on-new-location semantics.

A session issues a ticket per run. When a run finishes it may publish its
result only if no newer ticket has been issued in the meantime; otherwise the
result is discarded. This gives cancellation-by-replacement without touching
the in-flight work, and without any state shared between sessions.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class RunTicket:
    """Proof of which generation a run belongs to."""

    generation: int
    tracker: "RunGenerationTracker" = field(repr=False, compare=False)

    def is_current(self) -> bool:
        return self.tracker.is_current(self)

    def publish(self, result: Any) -> bool:
        return self.tracker.publish(self, result)


class RunGenerationTracker:
    """Issues monotonically increasing tickets and keeps the newest published result."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._latest: Optional[Any] = None

    def begin(self) -> RunTicket:
        """Start a new generation, superseding every earlier ticket."""
        with self._lock:
            self._issued += 1
            return RunTicket(generation=self._issued, tracker=self)

    def is_current(self, ticket: RunTicket) -> bool:
        with self._lock:
            return ticket.tracker is self and ticket.generation == self._issued

    def publish(self, ticket: RunTicket, result: Any) -> bool:
        """Make ``result`` observable if ``ticket`` is still the newest.

        Returns:
            True if published, False if the ticket was superseded
        """
        with self._lock:
            if ticket.tracker is not self or ticket.generation != self._issued:
                return False
            self._latest = result
            return True

    @property
    def current_generation(self) -> int:
        with self._lock:
            return self._issued

    @property
    def latest(self) -> Optional[Any]:
        with self._lock:
            return self._latest
