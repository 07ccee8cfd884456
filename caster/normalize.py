from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import UNKNOWN_MAP


@dataclass(frozen=True)
class WeaponLine:
    taken: int = 0
    kills: int = 0
    dropped: int = 0
    acc_hits: int = 0
    acc_attacks: int = 0


@dataclass(frozen=True)
class PlayerLine:
    name: str
    team: str = ""
    frags: int = 0
    deaths: int = 0
    kills: int = 0
    dmg_given: int = 0
    dmg_to_die: int = 0
    speed: float = 0.0
    # None when the stats export has no entry for that weapon or item on this map
    rl: Optional[WeaponLine] = None
    lg: Optional[WeaponLine] = None
    ra: Optional[int] = None
    quad: Optional[int] = None


@dataclass(frozen=True)
class MapRecord:
    team1: str
    team2: str
    score1: int = 0
    score2: int = 0
    map: str = UNKNOWN_MAP
    date: str = ""
    timestamp: float = 0.0
    players: Tuple[PlayerLine, ...] = field(default_factory=tuple)


def normalize_team(name: Optional[Any]) -> str:
    """Equality key for team names: lower-cased and trimmed, '' for None."""
    if name is None:
        return ""
    return str(name).lower().strip()


def involves(record: MapRecord, team_key: str) -> bool:
    return normalize_team(record.team1) == team_key or normalize_team(record.team2) == team_key


def is_pairing(record: MapRecord, key_a: str, key_b: str) -> bool:
    t1 = normalize_team(record.team1)
    t2 = normalize_team(record.team2)
    return (t1 == key_a and t2 == key_b) or (t1 == key_b and t2 == key_a)


def oriented_scores(record: MapRecord, team_key: str) -> Tuple[int, int]:
    """Scores as (for, against) from the point of view of ``team_key``."""
    if normalize_team(record.team1) == team_key:
        return record.score1, record.score2
    return record.score2, record.score1


def opponent_of(record: MapRecord, team_key: str) -> str:
    if normalize_team(record.team1) == team_key:
        return record.team2
    return record.team1


def _safe_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def _parse_time(ts: Optional[str]) -> Optional[datetime]:
    if not ts:
        return None
    text = str(ts).strip()
    dt: Optional[datetime] = None
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                dt = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _timestamp_of(raw: Dict[str, Any], date: str) -> float:
    # Import records carry epoch milliseconds alongside the display date
    ts = raw.get("timestamp")
    if isinstance(ts, (int, float)) and not isinstance(ts, bool):
        return float(ts) / 1000.0
    dt = _parse_time(date)
    return dt.timestamp() if dt else 0.0


def _safe_float(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _section(entry: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = entry.get(key)
    return value if isinstance(value, dict) else {}


def _weapon_from_entry(weapon: Any) -> Optional[WeaponLine]:
    if not isinstance(weapon, dict):
        return None
    pickups = _section(weapon, "pickups")
    acc = _section(weapon, "acc")
    return WeaponLine(
        taken=_safe_int(pickups.get("total-taken")),
        kills=_safe_int(_section(weapon, "kills").get("enemy")),
        dropped=_safe_int(pickups.get("dropped")),
        acc_hits=_safe_int(acc.get("hits")),
        acc_attacks=_safe_int(acc.get("attacks")),
    )


def _item_from_entry(item: Any) -> Optional[int]:
    if not isinstance(item, dict):
        return None
    return _safe_int(item.get("took") or item.get("taken"))


def _player_from_entry(entry: Dict[str, Any]) -> Optional[PlayerLine]:
    name = entry.get("name") or entry.get("nick")
    if not name:
        return None
    stats = _section(entry, "stats")
    frags = stats.get("frags") if stats.get("frags") is not None else entry.get("frags")
    deaths = stats.get("deaths") if stats.get("deaths") is not None else entry.get("deaths")

    # ktxstats detail: damage, speed, weapons and items are all optional
    dmg = _section(entry, "dmg")
    weapons = _section(entry, "weapons")
    items = _section(entry, "items")
    return PlayerLine(
        name=str(name),
        team=str(entry.get("team") or ""),
        frags=_safe_int(frags),
        deaths=_safe_int(deaths),
        kills=_safe_int(stats.get("kills")),
        dmg_given=_safe_int(dmg.get("given")),
        dmg_to_die=_safe_int(dmg.get("taken-to-die") or dmg.get("taken_to_die")),
        speed=_safe_float(_section(entry, "speed").get("avg")),
        rl=_weapon_from_entry(weapons.get("rl")),
        lg=_weapon_from_entry(weapons.get("lg")),
        ra=_item_from_entry(items.get("ra")),
        quad=_item_from_entry(items.get("q")),
    )


def _normalize_players(players: Any) -> Tuple[PlayerLine, ...]:
    if not isinstance(players, list):
        return ()
    out: List[PlayerLine] = []
    for p in players:
        if not isinstance(p, dict):
            continue
        line = _player_from_entry(p)
        if line is not None:
            out.append(line)
    return tuple(out)


def _score_for(scores: Dict[str, Any], team: str) -> int:
    key = normalize_team(team)
    for name, value in scores.items():
        if normalize_team(name) == key:
            return _safe_int(value)
    return 0


def _teams_and_scores(raw: Dict[str, Any]) -> Optional[Tuple[str, str, int, int]]:
    if raw.get("team1") and raw.get("team2"):
        return (
            str(raw["team1"]),
            str(raw["team2"]),
            _safe_int(raw.get("score1")),
            _safe_int(raw.get("score2")),
        )

    teams = raw.get("teams")
    if not isinstance(teams, list) or len(teams) < 2:
        return None
    names = [t.get("name") if isinstance(t, dict) else t for t in teams[:2]]
    if not names[0] or not names[1]:
        return None
    scores = raw.get("scores") if isinstance(raw.get("scores"), dict) else {}
    return (
        str(names[0]),
        str(names[1]),
        _score_for(scores, str(names[0])),
        _score_for(scores, str(names[1])),
    )


def normalize_map(raw: Dict[str, Any]) -> Optional[MapRecord]:
    """Build a MapRecord from one raw record, or None when it names no team pair."""
    pairing = _teams_and_scores(raw)
    if pairing is None:
        return None
    team1, team2, score1, score2 = pairing

    players = raw.get("players")
    if players is None:
        original = raw.get("originalData") or {}
        if isinstance(original, dict):
            players = original.get("players")

    date = str(raw.get("date") or "")
    return MapRecord(
        team1=team1,
        team2=team2,
        score1=score1,
        score2=score2,
        map=str(raw.get("map") or UNKNOWN_MAP),
        date=date,
        timestamp=_timestamp_of(raw, date),
        players=_normalize_players(players),
    )


def normalize_maps(records: Iterable[Any]) -> List[MapRecord]:
    maps: List[MapRecord] = []
    for raw in records:
        if isinstance(raw, MapRecord):
            maps.append(raw)
            continue
        if not isinstance(raw, dict):
            continue
        record = normalize_map(raw)
        if record is not None:
            maps.append(record)
    return maps
