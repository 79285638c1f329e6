"""Terminal failures of a ranking run.

Every error carries a ``user_message`` suitable for showing to the person who
asked for nearby stations; ``str(error)`` keeps the technical detail for logs.
Per-record rejections are not exceptions: the normalizer returns them as
values and the pipeline drops them.
"""

from typing import Optional


class RankingError(Exception):
    """Base class for failures that end a ranking run."""

    user_message = "Could not rank nearby stations."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.user_message)


class LocationUnavailable(RankingError):
    """The caller's position could not be obtained; nothing was fetched."""

    user_message = "Your location could not be determined."


class FetchFailed(RankingError):
    """The station batch could not be retrieved (network, status, timeout)."""

    user_message = "Station data could not be retrieved. Try again later."


class MalformedBatch(FetchFailed):
    """The payload was retrieved but does not contain the records collection."""

    user_message = "Station data was received in an unexpected format."


class NoValidRecords(RankingError):
    """Every record in the batch was rejected, or the batch was empty."""

    user_message = "No stations with valid coordinates were found."


class NoRecordsInRange(RankingError):
    """A radius bound excluded every valid record."""

    user_message = "No stations were found within the requested radius."

    def __init__(self, radius_km: Optional[float] = None, message: Optional[str] = None) -> None:
        self.radius_km = radius_km
        if message is None and radius_km is not None:
            message = f"No stations within {radius_km:g} km"
        super().__init__(message)
