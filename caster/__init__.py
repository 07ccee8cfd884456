"""Pre-match caster insights package."""

__all__ = [
    "config",
    "normalize",
    "head_to_head",
    "map_stats",
    "players",
    "form",
    "common_opponents",
    "insights",
    "qwstats_client",
    "external",
    "report",
    "render",
]
