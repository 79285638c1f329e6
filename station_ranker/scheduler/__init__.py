"""Periodic location polling for watch mode."""

from .service import WatchService

__all__ = ["WatchService"]
