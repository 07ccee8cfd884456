from __future__ import annotations

from typing import Any, Dict, List, Optional

from .normalize import normalize_team
from .qwstats_client import GlobalStats


def _dict_rows(rows: Any) -> List[Dict[str, Any]]:
    if not isinstance(rows, list):
        return []
    return [r for r in rows if isinstance(r, dict)]


def _rows_under(payload: Any, keys: tuple) -> List[Dict[str, Any]]:
    if isinstance(payload, list):
        return _dict_rows(payload)
    if isinstance(payload, dict):
        for key in keys:
            if payload.get(key):
                return _dict_rows(payload[key])
    return []


def extract_rows(payload: Any) -> List[Dict[str, Any]]:
    """Match-like rows from a bare list, ``{"matches": [...]}`` or ``{"games": [...]}``."""
    return _rows_under(payload, ("matches", "games"))


def extract_players(payload: Any) -> List[Dict[str, Any]]:
    return _rows_under(payload, ("players", "roster"))


def _result(row: Dict[str, Any]) -> str:
    return str(row.get("result") or "").upper()


def summarize_h2h(payload: Any, tag_a: str) -> Dict[str, int]:
    rows = extract_rows(payload)
    key = normalize_team(tag_a)
    wins_a = sum(
        1
        for r in rows
        if normalize_team(r.get("team") or r.get("teamA")) == key and _result(r) == "W"
    )
    return {"maps": len(rows), "team_a_wins": wins_a, "team_b_wins": len(rows) - wins_a}


def summarize_form(payload: Any) -> Dict[str, int]:
    rows = extract_rows(payload)
    return {
        "maps": len(rows),
        "wins": sum(1 for r in rows if _result(r) == "W"),
        "losses": sum(1 for r in rows if _result(r) == "L"),
    }


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def summarize_roster(payload: Any, limit: int = 5) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for p in extract_players(payload)[:limit]:
        kd = p.get("kd")
        if kd is None:
            kd = p.get("kdRatio")
        if kd is None:
            kd = p.get("efficiency")
        out.append(
            {
                "name": p.get("name") or p.get("nick") or p.get("player") or "?",
                "kd": _as_float(kd),
            }
        )
    return out


def summarize_global(stats: GlobalStats, tag_a: str) -> Dict[str, Any]:
    """Displayable global numbers; a failed or empty slot becomes None."""

    def _or_none(name: str, fn, *args) -> Any:
        payload = stats.payload(name)
        if payload is None:
            return None
        return fn(payload, *args)

    return {
        "h2h": _or_none("h2h", summarize_h2h, tag_a),
        "form1": _or_none("form1", summarize_form),
        "form2": _or_none("form2", summarize_form),
        "maps1": stats.payload("maps1"),
        "maps2": stats.payload("maps2"),
        "roster1": _or_none("roster1", summarize_roster),
        "roster2": _or_none("roster2", summarize_roster),
        "errors": {name: s.error for name, s in stats.slots.items() if not s.ok},
        "all_failed": stats.all_failed,
    }
