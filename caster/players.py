from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, Iterable, List

from .config import (
    PLAYER_COLD_RATIO,
    PLAYER_HOT_RATIO,
    PLAYER_TREND_WINDOW,
    SPOTLIGHT_MIN_MAPS,
    SPOTLIGHT_SIZE,
)
from .map_stats import round_half_up
from .normalize import PlayerLine, WeaponLine, normalize_maps, normalize_team

_HOT = Fraction(str(PLAYER_HOT_RATIO))
_COLD = Fraction(str(PLAYER_COLD_RATIO))


def _per(total: float, count: int) -> float:
    """Rate to one decimal place, 0 when there was no opportunity."""
    return round(total / count, 1) if count > 0 else 0.0


@dataclass
class WeaponTotals:
    taken: int = 0
    kills: int = 0
    dropped: int = 0
    acc_hits: int = 0
    acc_attacks: int = 0

    def add(self, line: WeaponLine) -> None:
        self.taken += line.taken
        self.kills += line.kills
        self.dropped += line.dropped
        self.acc_hits += line.acc_hits
        self.acc_attacks += line.acc_attacks


@dataclass
class PlayerStats:
    name: str
    team: str = ""
    maps_played: int = 0
    total_frags: int = 0
    total_deaths: int = 0
    total_kills: int = 0
    recent_frags: List[int] = field(default_factory=list)
    total_dmg_given: int = 0
    total_dmg_to_die: int = 0
    total_speed: float = 0.0
    rl: WeaponTotals = field(default_factory=WeaponTotals)
    lg: WeaponTotals = field(default_factory=WeaponTotals)
    lg_maps: int = 0
    ra_total: int = 0
    ra_maps: int = 0
    quad_total: int = 0
    quad_maps: int = 0

    def add(self, line: PlayerLine) -> None:
        self.maps_played += 1
        self.total_frags += line.frags
        self.total_deaths += line.deaths
        self.total_kills += line.kills
        self.recent_frags.append(line.frags)
        if line.team:
            self.team = line.team

        self.total_dmg_given += line.dmg_given
        self.total_dmg_to_die += line.dmg_to_die
        self.total_speed += line.speed
        if line.rl is not None:
            self.rl.add(line.rl)
        # LG rates are per map where the weapon was on the map
        if line.lg is not None:
            self.lg_maps += 1
            self.lg.add(line.lg)
        if line.ra is not None:
            self.ra_maps += 1
            self.ra_total += line.ra
        if line.quad is not None:
            self.quad_maps += 1
            self.quad_total += line.quad

    @property
    def kd_ratio(self) -> float:
        if self.total_deaths > 0:
            return round(self.total_frags / self.total_deaths, 2)
        return float(self.total_frags)

    @property
    def frags_per_map(self) -> float:
        if not self.maps_played:
            return 0.0
        return round(self.total_frags / self.maps_played, 1)

    @property
    def trend(self) -> str:
        # compared as exact fractions so a recent average of exactly +-10% lands in the band
        baseline = Fraction(str(self.frags_per_map))
        last = self.recent_frags[-PLAYER_TREND_WINDOW:]
        recent_avg = Fraction(sum(last), len(last)) if last else baseline
        # a zero baseline is always steady
        if recent_avg >= baseline * _HOT and recent_avg > baseline:
            return "hot"
        if recent_avg <= baseline * _COLD and recent_avg < baseline:
            return "cold"
        return "steady"

    @property
    def eff_pct(self) -> float:
        """Kills as a percentage of kills plus deaths."""
        return _per(self.total_kills * 100, self.total_kills + self.total_deaths)

    @property
    def avg_dmg(self) -> int:
        return round_half_up(self.total_dmg_given / self.maps_played) if self.maps_played else 0

    @property
    def avg_to_die(self) -> int:
        return round_half_up(self.total_dmg_to_die / self.maps_played) if self.maps_played else 0

    @property
    def avg_speed(self) -> int:
        return round_half_up(self.total_speed / self.maps_played) if self.maps_played else 0

    @property
    def lg_acc(self) -> float:
        return _per(self.lg.acc_hits * 100, self.lg.acc_attacks)

    @property
    def has_detailed_stats(self) -> bool:
        return self.total_dmg_given > 0 or self.rl.taken > 0 or self.rl.kills > 0 or self.lg.taken > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "team": self.team,
            "maps_played": self.maps_played,
            "total_frags": self.total_frags,
            "total_deaths": self.total_deaths,
            "total_kills": self.total_kills,
            "kd_ratio": self.kd_ratio,
            "frags_per_map": self.frags_per_map,
            "trend": self.trend,
            "eff_pct": self.eff_pct,
            "avg_dmg": self.avg_dmg,
            "avg_to_die": self.avg_to_die,
            "avg_speed": self.avg_speed,
            "rl_taken": _per(self.rl.taken, self.maps_played),
            "rl_kills": _per(self.rl.kills, self.maps_played),
            "rl_drop": _per(self.rl.dropped, self.maps_played),
            "lg_taken": _per(self.lg.taken, self.lg_maps),
            "lg_kills": _per(self.lg.kills, self.lg_maps),
            "lg_drop": _per(self.lg.dropped, self.lg_maps),
            "lg_acc": self.lg_acc,
            "ra": _per(self.ra_total, self.ra_maps),
            "quad": _per(self.quad_total, self.quad_maps),
            "has_detailed_stats": self.has_detailed_stats,
        }


@dataclass
class Spotlight:
    hot_hands: List[PlayerStats] = field(default_factory=list)
    struggling: List[PlayerStats] = field(default_factory=list)


def calculate_player_stats(maps: Iterable[Any]) -> Dict[str, PlayerStats]:
    """Per-player totals across every map, keyed by normalized player name."""
    players: Dict[str, PlayerStats] = {}

    for m in normalize_maps(maps):
        for p in m.players:
            key = normalize_team(p.name)
            if not key:
                continue
            stats = players.get(key)
            if stats is None:
                stats = PlayerStats(name=p.name, team=p.team)
                players[key] = stats
            stats.add(p)

    return players


def players_for_teams(players: Dict[str, PlayerStats], *teams: str) -> List[PlayerStats]:
    keys = {normalize_team(t) for t in teams}
    return [p for p in players.values() if normalize_team(p.team) in keys]


def get_player_spotlight(
    players: Iterable[PlayerStats],
    min_maps: int = SPOTLIGHT_MIN_MAPS,
) -> Spotlight:
    eligible = [p for p in players if p.maps_played >= min_maps]
    ranked = sorted(eligible, key=lambda p: p.kd_ratio, reverse=True)
    return Spotlight(
        hot_hands=ranked[:SPOTLIGHT_SIZE],
        struggling=list(reversed(ranked[-SPOTLIGHT_SIZE:])) if ranked else [],
    )
