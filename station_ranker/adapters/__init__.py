"""Adapters that fetch raw station batches.

- MineturAdapter: live fuel-price REST service
- FileAdapter: saved JSON snapshot

Use the factory to pick one from configuration:
    from station_ranker.adapters import get_adapter
    records = get_adapter(source_config, advanced_config).fetch_records(source_config)
"""

from .base import RECORDS_KEY, BaseAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import get_adapter
from .file import FileAdapter
from .minetur import MineturAdapter

__all__ = [
    "BaseAdapter",
    "RECORDS_KEY",
    "get_adapter",
    "MineturAdapter",
    "FileAdapter",
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
