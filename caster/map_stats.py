from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from .normalize import involves, normalize_maps, normalize_team, oriented_scores


@dataclass
class MapPerformance:
    wins: int = 0
    losses: int = 0
    played: int = 0
    frags_for: int = 0
    frags_against: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.played if self.played else 0.0

    @property
    def avg_frag_diff(self) -> int:
        if not self.played:
            return 0
        return round_half_up((self.frags_for - self.frags_against) / self.played)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "played": self.played,
            "frags_for": self.frags_for,
            "frags_against": self.frags_against,
            "win_rate": self.win_rate,
            "avg_frag_diff": self.avg_frag_diff,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_map_stats(team: str, maps: Iterable[Any]) -> Dict[str, MapPerformance]:
    key = normalize_team(team)
    stats: Dict[str, MapPerformance] = {}

    for m in normalize_maps(maps):
        if not involves(m, key):
            continue
        entry = stats.setdefault(m.map, MapPerformance())
        frags_for, frags_against = oriented_scores(m, key)
        entry.frags_for += frags_for
        entry.frags_against += frags_against
        entry.played += 1
        if frags_for > frags_against:
            entry.wins += 1
        elif frags_against > frags_for:
            entry.losses += 1

    return stats
