"""Base adapter class with shared functionality for station data sources.

Adapters fetch one raw batch per call. They do not retry: a failed fetch is
terminal for the ranking run that asked for it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from station_ranker.config.models import SourceConfig
from station_ranker.domain.models import RawRecord
from station_ranker.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

# Key holding the station array in EstacionesTerrestres payloads
RECORDS_KEY = "ListaEESSPrecio"


class BaseAdapter(ABC):
    """Base class for all station data adapters.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    ADAPTER_NAME = "base"

    def __init__(self, timeout: int = 30, user_agent: str = "StationRanker/1.0") -> None:
        """Initialize adapter with HTTP settings.

        Raises:
            AdapterConfigurationError: If timeout is outside 5-300 or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def fetch_records(self, source_config: SourceConfig) -> List[RawRecord]:
        """Fetch the raw station batch.

        Returns:
            Raw records in the order the source listed them

        Raises:
            AdapterHTTPError: Transport failure or HTTP 4xx/5xx
            AdapterTimeoutError: Request timed out
            AdapterResponseError: Payload is not the expected batch shape
        """

    def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On an undecodable body
        """
        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={
                    "event": "adapter.fetch.request",
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.get(url, params=params, timeout=self.timeout)

            if response.status_code >= 400:
                is_server_error = response.status_code >= 500
                logger.log(
                    logging.WARNING if is_server_error else logging.ERROR,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": "adapter.fetch.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )
                raise AdapterHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.error(
                    f"Failed to parse JSON response from {url}",
                    extra={
                        "event": "adapter.fetch.error",
                        "error_type": "JSONDecodeError",
                        "url": url,
                    },
                )
                raise AdapterResponseError(
                    f"Failed to parse JSON response from {url}: {e}"
                ) from e

            logger.debug(
                "HTTP request succeeded",
                extra={
                    "event": "adapter.fetch.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            return data

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "adapter.fetch.error",
                    "error_type": "Timeout",
                    "url": url,
                },
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "adapter.fetch.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

    def _extract_records(self, payload: Any, origin: str) -> List[RawRecord]:
        """Pull the station array out of an EstacionesTerrestres payload.

        Raises:
            AdapterResponseError: If the payload is not an object holding a list
                under RECORDS_KEY
        """
        if not isinstance(payload, dict):
            raise AdapterResponseError(
                f"Expected JSON object from {origin}, got {type(payload).__name__}"
            )

        if RECORDS_KEY not in payload:
            raise AdapterResponseError(
                f"Payload from {origin} has no '{RECORDS_KEY}' field"
            )

        records = payload[RECORDS_KEY]
        if not isinstance(records, list):
            raise AdapterResponseError(
                f"Expected '{RECORDS_KEY}' to be an array, got {type(records).__name__}"
            )

        result_status = payload.get("ResultadoConsulta")
        if result_status and str(result_status).upper() != "OK":
            logger.warning(
                "Source reported a non-OK query result",
                extra={
                    "event": "adapter.fetch.result_status",
                    "adapter": self.ADAPTER_NAME,
                    "result_status": result_status,
                },
            )

        return records
