from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import requests

from .config import (
    GLOBAL_FORM_MONTHS,
    GLOBAL_H2H_MONTHS,
    GLOBAL_MAPS_MONTHS,
    GLOBAL_ROSTER_MONTHS,
    StatsApiConfig,
    stats_api_config_from_env,
)
from .normalize import normalize_team

logger = logging.getLogger(__name__)


class QWStatsError(RuntimeError):
    """A single stats-service request failed (status, transport or body)."""


def normalize_tag(tag: Optional[str]) -> str:
    return normalize_team(tag)


@dataclass
class QWStatsClient:
    """Read-only client for the public QW stats API.

    One request per call, bounded by ``timeout_s``; failures raise QWStatsError
    and are never retried.
    """

    config: Optional[StatsApiConfig] = None

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = stats_api_config_from_env()
        self.session = requests.Session()
        self.session.headers.update({"accept": "application/json"})

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        assert self.config is not None
        url = f"{self.config.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v}
        logger.debug(f"GET {url} {query}")
        try:
            resp = self.session.get(url, params=query, timeout=self.config.timeout_s)
        except requests.Timeout as exc:
            raise QWStatsError(f"QW Stats API timeout after {self.config.timeout_s}s: {path}") from exc
        except requests.RequestException as exc:
            raise QWStatsError(f"QW Stats API request failed: {path}: {exc}") from exc

        if not resp.ok:
            raise QWStatsError(f"QW Stats API {resp.status_code}: {path}")
        try:
            return resp.json()
        except ValueError as exc:
            raise QWStatsError(f"QW Stats API returned invalid JSON: {path}") from exc

    def check_health(self) -> Any:
        return self._get("/health")

    def get_h2h(
        self,
        team_a: str,
        team_b: str,
        months: Optional[int] = None,
        limit: Optional[int] = None,
        map_name: Optional[str] = None,
    ) -> Any:
        return self._get(
            "/api/h2h",
            {
                "teamA": normalize_tag(team_a),
                "teamB": normalize_tag(team_b),
                "months": months,
                "limit": limit,
                "map": map_name,
            },
        )

    def get_form(
        self,
        team: str,
        months: Optional[int] = None,
        limit: Optional[int] = None,
        map_name: Optional[str] = None,
    ) -> Any:
        return self._get(
            "/api/form",
            {"team": normalize_tag(team), "months": months, "limit": limit, "map": map_name},
        )

    def get_map_stats(
        self,
        team: str,
        vs_team: Optional[str] = None,
        months: Optional[int] = None,
    ) -> Any:
        return self._get(
            "/api/maps",
            {
                "team": normalize_tag(team),
                "vsTeam": normalize_tag(vs_team) if vs_team else None,
                "months": months,
            },
        )

    def get_roster(self, team: str, months: Optional[int] = None) -> Any:
        return self._get("/api/roster", {"team": normalize_tag(team), "months": months})


@dataclass
class SlotResult:
    payload: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GlobalStats:
    slots: Dict[str, SlotResult] = field(default_factory=dict)

    @property
    def all_failed(self) -> bool:
        return bool(self.slots) and all(not s.ok for s in self.slots.values())

    @property
    def first_error(self) -> Optional[str]:
        for s in self.slots.values():
            if not s.ok:
                return s.error
        return None

    def payload(self, name: str) -> Any:
        slot = self.slots.get(name)
        return slot.payload if slot and slot.ok else None


GLOBAL_SLOTS = ("h2h", "form1", "form2", "maps1", "maps2", "roster1", "roster2")


def _global_queries(client: QWStatsClient, tag_a: str, tag_b: str) -> Dict[str, Callable[[], Any]]:
    return {
        "h2h": lambda: client.get_h2h(tag_a, tag_b, months=GLOBAL_H2H_MONTHS),
        "form1": lambda: client.get_form(tag_a, months=GLOBAL_FORM_MONTHS),
        "form2": lambda: client.get_form(tag_b, months=GLOBAL_FORM_MONTHS),
        "maps1": lambda: client.get_map_stats(tag_a, months=GLOBAL_MAPS_MONTHS),
        "maps2": lambda: client.get_map_stats(tag_b, months=GLOBAL_MAPS_MONTHS),
        "roster1": lambda: client.get_roster(tag_a, months=GLOBAL_ROSTER_MONTHS),
        "roster2": lambda: client.get_roster(tag_b, months=GLOBAL_ROSTER_MONTHS),
    }


def fetch_global_stats(client: QWStatsClient, tag_a: str, tag_b: str) -> GlobalStats:
    """Run the seven global queries concurrently; each slot settles on its own."""
    queries = _global_queries(client, tag_a, tag_b)
    result = GlobalStats()

    with ThreadPoolExecutor(max_workers=len(queries)) as pool:
        futures = {name: pool.submit(fn) for name, fn in queries.items()}
        for name in GLOBAL_SLOTS:
            try:
                result.slots[name] = SlotResult(payload=futures[name].result())
            except QWStatsError as exc:
                logger.warning(f"Global stats query '{name}' failed: {exc}")
                result.slots[name] = SlotResult(error=str(exc))
            except Exception as exc:
                logger.exception(f"Global stats query '{name}' crashed")
                result.slots[name] = SlotResult(error=f"{type(exc).__name__}: {exc}")

    ok = sum(1 for s in result.slots.values() if s.ok)
    logger.info(f"Global stats for {tag_a} vs {tag_b}: {ok}/{len(GLOBAL_SLOTS)} queries succeeded")
    return result
