from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import FORM_WINDOW
from .normalize import involves, normalize_maps, normalize_team, opponent_of, oriented_scores

_RESULT_VALUE = {"W": 1.0, "D": 0.5, "L": 0.0}


@dataclass
class FormResult:
    map: str
    date: str
    opponent: str
    frags_for: int
    frags_against: int
    result: str


@dataclass
class RecentForm:
    team: str
    total_maps: int = 0
    last_results: List[FormResult] = field(default_factory=list)
    wins: int = 0
    losses: int = 0
    draws: int = 0
    momentum: float = 0.5
    trend: str = "stable"
    streak: int = 0
    streak_type: Optional[str] = None

    @property
    def record(self) -> str:
        text = f"{self.wins}W-{self.losses}L"
        if self.draws > 0:
            text += f"-{self.draws}D"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team": self.team,
            "total_maps": self.total_maps,
            "last_results": [r.__dict__ for r in self.last_results],
            "record": self.record,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "momentum": self.momentum,
            "momentum_label": momentum_label(self.momentum),
            "trend": self.trend,
            "streak": self.streak,
            "streak_type": self.streak_type,
        }


def _outcome(frags_for: int, frags_against: int) -> str:
    if frags_for > frags_against:
        return "W"
    if frags_for < frags_against:
        return "L"
    return "D"


def _momentum(results: List[FormResult]) -> float:
    """Linear-ramp weighted mean of outcomes; the latest map weighs 1."""
    n = len(results)
    if n == 0:
        return 0.5
    weights = [(i + 1) / n for i in range(n)]
    total = sum(_RESULT_VALUE[r.result] * w for r, w in zip(results, weights))
    return total / sum(weights)


def _trend(results: List[FormResult]) -> str:
    half = len(results) // 2
    first = sum(1 for r in results[:half] if r.result == "W")
    second = sum(1 for r in results[half:] if r.result == "W")
    if second > first + 1:
        return "rising"
    if second < first - 1:
        return "falling"
    return "stable"


def _streak(results: List[FormResult]) -> Tuple[int, Optional[str]]:
    streak = 0
    streak_type: Optional[str] = None
    for r in reversed(results):
        if streak_type is None:
            streak_type = r.result
            streak = 1
        elif r.result == streak_type:
            streak += 1
        else:
            break
    return streak, streak_type


def analyze_recent_form(team: str, maps: Iterable[Any], last_n: int = FORM_WINDOW) -> RecentForm:
    key = normalize_team(team)
    # stable sort: undated maps sit at epoch, ahead of everything dated
    team_maps = sorted(
        (m for m in normalize_maps(maps) if involves(m, key)),
        key=lambda m: m.timestamp,
    )
    window = team_maps[-last_n:] if last_n > 0 else []

    results: List[FormResult] = []
    for m in window:
        frags_for, frags_against = oriented_scores(m, key)
        results.append(
            FormResult(
                map=m.map,
                date=m.date,
                opponent=opponent_of(m, key),
                frags_for=frags_for,
                frags_against=frags_against,
                result=_outcome(frags_for, frags_against),
            )
        )

    streak, streak_type = _streak(results)
    return RecentForm(
        team=team,
        total_maps=len(team_maps),
        last_results=results,
        wins=sum(1 for r in results if r.result == "W"),
        losses=sum(1 for r in results if r.result == "L"),
        draws=sum(1 for r in results if r.result == "D"),
        momentum=_momentum(results),
        trend=_trend(results),
        streak=streak,
        streak_type=streak_type,
    )


def momentum_label(momentum: float) -> str:
    if momentum > 0.7:
        return "Strong"
    if momentum > 0.5:
        return "Moderate"
    if momentum > 0.3:
        return "Weak"
    return "Poor"
