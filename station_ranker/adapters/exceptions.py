"""Exceptions raised by station data adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    The pipeline maps AdapterResponseError to MalformedBatch and every other
    AdapterError to FetchFailed.
    """


class AdapterHTTPError(AdapterError):
    """The request failed at the transport level or returned 4xx/5xx."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """
        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 for connection failures)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """The request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """A payload arrived but is not valid JSON or lacks the records collection."""


class AdapterConfigurationError(AdapterError):
    """The adapter was given an invalid configuration."""
