"""Port (interface) for the supplementary global statistics service."""

from abc import ABC, abstractmethod

from caster.qwstats_client import GlobalStats


class GlobalStatsPort(ABC):
    """Port for fetching cross-tournament numbers for a matchup."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether the service is configured for use."""
        ...

    @abstractmethod
    def fetch_matchup_stats(self, tag_a: str, tag_b: str) -> GlobalStats:
        """Fetch every global panel for two team tags.

        Each panel settles independently; a failed panel is recorded in its
        slot and never raised.

        Args:
            tag_a: Stats-service tag of the first team
            tag_b: Stats-service tag of the second team

        Returns:
            Per-panel results
        """
        ...
