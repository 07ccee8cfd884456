"""Application ports (interfaces)."""

from .global_stats import GlobalStatsPort

__all__ = [
    "GlobalStatsPort",
]
