"""Location provider interface."""

from abc import ABC, abstractmethod

from station_ranker.domain.models import UserLocation


class LocationProvider(ABC):
    """Supplies the caller's position, once per call.

    Implementations resolve a single UserLocation or raise LocationError;
    they never poll or retry on their own.
    """

    name = "base"

    @abstractmethod
    def get_location(self) -> UserLocation:
        """Return the caller's current location.

        Raises:
            LocationError: If the position cannot be obtained
        """
