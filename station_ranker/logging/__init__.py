"""Structured logging helpers shared by every station_ranker component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name onto every record.

    Fields passed through ``extra`` at the call site win over the adapter's
    defaults, so a call can still override ``component`` when it needs to.
    """

    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally bound to a component.

    Args:
        name: Logger name (typically __name__)
        component: Component label added to every record ("pipeline", "adapter", ...)

    Returns:
        Logger, or ComponentLoggerAdapter when a component is given

    Example:
        >>> logger = get_logger(__name__, component="ranking")
        >>> logger.info("Ranking finished", extra={"event": "ranking.completed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
