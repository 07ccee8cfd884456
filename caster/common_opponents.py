from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set

from .config import ADVANTAGE_THRESHOLD, GAP_PRECISION
from .map_stats import round_half_up
from .normalize import MapRecord, is_pairing, normalize_maps, normalize_team, oriented_scores


@dataclass
class OpponentRecord:
    wins: int = 0
    losses: int = 0
    total: int = 0
    frag_diff: int = 0
    avg_score: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.total if self.total else 0.0

    @property
    def dominance(self) -> float:
        return self.win_rate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "total": self.total,
            "win_rate": self.win_rate,
            "frag_diff": self.frag_diff,
            "avg_score": self.avg_score,
            "dominance": self.dominance,
        }


@dataclass
class OpponentComparison:
    opponent: str
    team1_result: OpponentRecord
    team2_result: OpponentRecord
    advantage: str


@dataclass
class CommonOpponentSummary:
    common_count: int = 0
    team1_advantages: int = 0
    team2_advantages: int = 0
    team1_avg_dominance: float = 0.5
    team2_avg_dominance: float = 0.5


@dataclass
class CommonOpponentAnalysis:
    breakdown: List[OpponentComparison] = field(default_factory=list)
    summary: CommonOpponentSummary = field(default_factory=CommonOpponentSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakdown": [
                {
                    "opponent": b.opponent,
                    "team1_result": b.team1_result.to_dict(),
                    "team2_result": b.team2_result.to_dict(),
                    "advantage": b.advantage,
                }
                for b in self.breakdown
            ],
            "summary": self.summary.__dict__,
        }


def get_opponents(team: str, maps: Iterable[Any]) -> Set[str]:
    key = normalize_team(team)
    opponents: Set[str] = set()
    for m in normalize_maps(maps):
        t1 = normalize_team(m.team1)
        t2 = normalize_team(m.team2)
        if t1 == key:
            opponents.add(t2)
        elif t2 == key:
            opponents.add(t1)
    opponents.discard(key)
    return opponents


def _performance(key: str, opponent_key: str, maps: Sequence[MapRecord]) -> OpponentRecord:
    record = OpponentRecord()
    frags_for = 0
    frags_against = 0
    for m in maps:
        if not is_pairing(m, key, opponent_key):
            continue
        sf, sa = oriented_scores(m, key)
        frags_for += sf
        frags_against += sa
        record.total += 1
        if sf > sa:
            record.wins += 1
        elif sa > sf:
            record.losses += 1
    record.frag_diff = frags_for - frags_against
    record.avg_score = round_half_up(frags_for / record.total) if record.total else 0
    return record


def performance_vs_opponent(team: str, opponent: str, maps: Iterable[Any]) -> OpponentRecord:
    return _performance(normalize_team(team), normalize_team(opponent), normalize_maps(maps))


def _advantage(team1: OpponentRecord, team2: OpponentRecord) -> str:
    # win rates like 7/20 and 1/5 must compare as an exact 0.15 gap
    diff = round(team1.dominance - team2.dominance, GAP_PRECISION)
    if abs(diff) >= ADVANTAGE_THRESHOLD:
        return "team1" if diff > 0 else "team2"
    return "even"


def analyze_common_opponents(team_a: str, team_b: str, maps: Iterable[Any]) -> CommonOpponentAnalysis:
    """Compare two teams through the opponents both of them have played.

    Each shared opponent is scored by win rate ("dominance") for both sides;
    a gap of at least ADVANTAGE_THRESHOLD hands that opponent to the stronger side.
    """
    records = normalize_maps(maps)
    key_a = normalize_team(team_a)
    key_b = normalize_team(team_b)
    common = (get_opponents(key_a, records) & get_opponents(key_b, records)) - {key_a, key_b}

    breakdown: List[OpponentComparison] = []
    for opponent in sorted(common):
        r1 = _performance(key_a, opponent, records)
        r2 = _performance(key_b, opponent, records)
        breakdown.append(
            OpponentComparison(
                opponent=opponent,
                team1_result=r1,
                team2_result=r2,
                advantage=_advantage(r1, r2),
            )
        )

    summary = CommonOpponentSummary(
        common_count=len(breakdown),
        team1_advantages=sum(1 for b in breakdown if b.advantage == "team1"),
        team2_advantages=sum(1 for b in breakdown if b.advantage == "team2"),
    )
    if breakdown:
        summary.team1_avg_dominance = sum(b.team1_result.dominance for b in breakdown) / len(breakdown)
        summary.team2_avg_dominance = sum(b.team2_result.dominance for b in breakdown) / len(breakdown)

    return CommonOpponentAnalysis(breakdown=breakdown, summary=summary)
