"""Scoped logging fields backed by contextvars.

Fields pushed here (``session_id``, ``run_id``, ``generation``) are merged into
every record emitted in the same thread by ``ContextualFilter``. Worker threads
start from an empty context, so concurrent ranking runs never see each other's
fields. Fields whose value is None are not recorded.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

_fields: ContextVar[Dict[str, Any]] = ContextVar("station_ranker_log_fields", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently in scope."""
    return dict(_fields.get())


def push_log_context(**fields: Any) -> Token:
    """Merge fields into the current scope, overriding existing keys.

    A field passed as None removes that key for the new scope.

    Returns:
        Token for pop_log_context()
    """
    merged = {**_fields.get(), **fields}
    return _fields.set({key: value for key, value in merged.items() if value is not None})


def pop_log_context(token: Token) -> None:
    _fields.reset(token)


def clear_log_context() -> None:
    _fields.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Push fields for the duration of a ``with`` block.

    Yields the merged fields. The previous scope is restored on exit, also
    when the block raises.

    Example:
        >>> with log_context(run_id="9f1c", generation=3):
        ...     logger.info("Fetching stations")
    """
    token = push_log_context(**fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
