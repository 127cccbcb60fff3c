"""Infrastructure layer implementations."""

from stockflow.infrastructure import realtime, storage

__all__ = ["storage", "realtime"]
