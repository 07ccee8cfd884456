from __future__ import annotations

import os
from dataclasses import dataclass


# Common-opponent dominance gap needed to call an advantage
ADVANTAGE_THRESHOLD = 0.15
# Std-dev gap needed to call one side more consistent
CONSISTENCY_GAP = 0.15
# Decimal places kept when comparing rate gaps against the thresholds above
GAP_PRECISION = 9

HOT_MOMENTUM = 0.7
COLD_MOMENTUM = 0.4
STREAK_MIN = 3
MIN_FORM_MAPS = 3

FORM_WINDOW = 5
SPOTLIGHT_MIN_MAPS = 2
SPOTLIGHT_SIZE = 3

PLAYER_TREND_WINDOW = 3
PLAYER_HOT_RATIO = 1.1
PLAYER_COLD_RATIO = 0.9

UNKNOWN_MAP = "unknown"

QWSTATS_BASE_URL = "https://qw-api.poker-affiliate.org"
DEFAULT_TIMEOUT_S = 10.0

# Lookback windows (months) used for the global panels
GLOBAL_H2H_MONTHS = 12
GLOBAL_FORM_MONTHS = 6
GLOBAL_MAPS_MONTHS = 6
GLOBAL_ROSTER_MONTHS = 3


@dataclass(frozen=True)
class StatsApiConfig:
    base_url: str
    timeout_s: float
    enabled: bool


def stats_api_config_from_env() -> StatsApiConfig:
    base_url = os.environ.get("QWSTATS_BASE_URL", QWSTATS_BASE_URL).rstrip("/")
    try:
        timeout_s = float(os.environ.get("QWSTATS_TIMEOUT", DEFAULT_TIMEOUT_S))
    except ValueError:
        timeout_s = DEFAULT_TIMEOUT_S
    enabled = os.environ.get("QWSTATS_ENABLED", "1").lower() in {"1", "true", "yes"}
    return StatsApiConfig(base_url=base_url, timeout_s=timeout_s, enabled=enabled)
