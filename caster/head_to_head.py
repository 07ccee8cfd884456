from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List

from .normalize import is_pairing, normalize_maps, normalize_team, oriented_scores


@dataclass
class HeadToHeadMap:
    map: str
    date: str
    score1: int
    score2: int


@dataclass
class HeadToHead:
    total_maps: int = 0
    team_a_wins: int = 0
    team_b_wins: int = 0
    team_a_frags: int = 0
    team_b_frags: int = 0
    per_map: List[HeadToHeadMap] = field(default_factory=list)


def calculate_head_to_head(team_a: str, team_b: str, maps: Iterable[Any]) -> HeadToHead:
    """Every map between the two teams, with scores oriented so score1 is ``team_a``'s.

    Draws are listed and counted in ``total_maps`` but credited to neither side.
    Input order is preserved.
    """
    key_a = normalize_team(team_a)
    key_b = normalize_team(team_b)
    h2h = HeadToHead()

    for m in normalize_maps(maps):
        if not is_pairing(m, key_a, key_b):
            continue
        s1, s2 = oriented_scores(m, key_a)
        h2h.total_maps += 1
        h2h.team_a_frags += s1
        h2h.team_b_frags += s2
        if s1 > s2:
            h2h.team_a_wins += 1
        elif s2 > s1:
            h2h.team_b_wins += 1
        h2h.per_map.append(HeadToHeadMap(map=m.map, date=m.date, score1=s1, score2=s2))

    return h2h
