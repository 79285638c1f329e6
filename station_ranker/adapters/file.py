"""Adapter that reads a saved EstacionesTerrestres payload from disk.

Useful offline and for reproducible runs: save the service response once
(``curl ... > stations.json``) and point ``source.path`` at it.
"""

import json
from typing import List

from station_ranker.config.models import SourceConfig
from station_ranker.domain.models import RawRecord
from station_ranker.logging import get_logger

from .base import BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterHTTPError, AdapterResponseError

logger = get_logger(__name__, component="adapter")


class FileAdapter(BaseAdapter):
    """Loads the raw batch from a JSON snapshot file."""

    ADAPTER_NAME = "file"

    def fetch_records(self, source_config: SourceConfig) -> List[RawRecord]:
        if source_config.path is None:
            raise AdapterConfigurationError("File source requires a path")

        path = source_config.path
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise AdapterResponseError(f"Snapshot {path} is not valid JSON: {e}") from e
        except OSError as e:
            # Same failure class as an unreachable remote source
            raise AdapterHTTPError(f"Could not read snapshot {path}: {e}", status_code=0, url=str(path)) from e

        records = self._extract_records(payload, str(path))

        logger.info(
            f"Loaded {len(records)} stations from snapshot",
            extra={
                "event": "adapter.fetch.completed",
                "adapter": self.ADAPTER_NAME,
                "path": str(path),
                "count": len(records),
            },
        )

        return records
