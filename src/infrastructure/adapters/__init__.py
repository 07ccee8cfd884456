"""Infrastructure adapters."""

from .qwstats_adapter import QWStatsAdapter

__all__ = [
    "QWStatsAdapter",
]
