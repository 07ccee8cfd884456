"""Adapter wrapping the QW stats client."""

from caster.config import StatsApiConfig, stats_api_config_from_env
from caster.qwstats_client import GlobalStats, QWStatsClient, fetch_global_stats

from ...application.ports.global_stats import GlobalStatsPort


class QWStatsAdapter(GlobalStatsPort):
    """Adapter for fetching global numbers from the QW stats API."""

    def __init__(self, config: StatsApiConfig | None = None):
        """Initialize with service configuration.

        Args:
            config: Stats API configuration. If None, read from environment.
        """
        self._config = config or stats_api_config_from_env()
        self._client = QWStatsClient(self._config)

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def fetch_matchup_stats(self, tag_a: str, tag_b: str) -> GlobalStats:
        return fetch_global_stats(self._client, tag_a, tag_b)
