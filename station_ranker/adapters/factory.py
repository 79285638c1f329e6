"""Factory function for instantiating station data adapters."""

import logging

from station_ranker.config.models import AdvancedConfig, SourceConfig

from .base import BaseAdapter
from .exceptions import AdapterConfigurationError
from .file import FileAdapter
from .minetur import MineturAdapter

logger = logging.getLogger(__name__)

ADAPTERS = {
    "minetur": MineturAdapter,
    "file": FileAdapter,
}


def get_adapter(source_config: SourceConfig, advanced_config: AdvancedConfig) -> BaseAdapter:
    """Instantiate the adapter for ``source_config.type``.

    Raises:
        AdapterConfigurationError: If the type is unknown or the adapter rejects its settings

    Example:
        >>> adapter = get_adapter(SourceConfig(), AdvancedConfig())
        >>> records = adapter.fetch_records(SourceConfig())
    """
    source_type = str(getattr(source_config.type, "value", source_config.type)).lower()
    adapter_class = ADAPTERS.get(source_type)

    if not adapter_class:
        supported_types = ", ".join(sorted(ADAPTERS))
        raise AdapterConfigurationError(
            f"Unknown source type: {source_config.type}. Supported types: {supported_types}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={"source_type": source_type, "adapter_class": adapter_class.__name__},
    )

    try:
        return adapter_class(
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create {source_type} adapter: {e}") from e
