"""Adapter for the Spanish Ministry fuel-price REST service."""

from typing import List

from station_ranker.config.models import SourceConfig
from station_ranker.domain.models import RawRecord
from station_ranker.logging import get_logger

from .base import BaseAdapter

logger = get_logger(__name__, component="adapter")


class MineturAdapter(BaseAdapter):
    """Fetches every land-based station with its current prices.

    API Details:
        Endpoint: {base_url}EstacionesTerrestres/
        Method: GET
        Authentication: None (public)
        Response: JSON object with 'Fecha', 'ListaEESSPrecio', 'Nota' and
            'ResultadoConsulta'; each station is a flat object of string
            fields, decimals written with a comma
    """

    ADAPTER_NAME = "minetur"
    ENDPOINT = "EstacionesTerrestres/"

    def fetch_records(self, source_config: SourceConfig) -> List[RawRecord]:
        url = f"{source_config.base_url}{self.ENDPOINT}"

        logger.info(
            "Fetching stations from fuel-price service",
            extra={
                "event": "adapter.fetch.started",
                "adapter": self.ADAPTER_NAME,
                "url": url,
            },
        )

        payload = self._make_request(url)
        records = self._extract_records(payload, url)

        logger.info(
            f"Fetched {len(records)} stations",
            extra={
                "event": "adapter.fetch.completed",
                "adapter": self.ADAPTER_NAME,
                "count": len(records),
                "published_at": payload.get("Fecha"),
            },
        )

        return records
