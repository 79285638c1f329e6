"""Exceptions raised by location providers."""


class LocationError(Exception):
    """The caller's location could not be determined.

    The pipeline turns this into LocationUnavailable before any fetch happens.
    """
