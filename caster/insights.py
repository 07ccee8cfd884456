from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, List

from .common_opponents import CommonOpponentAnalysis, analyze_common_opponents
from .config import (
    COLD_MOMENTUM,
    CONSISTENCY_GAP,
    GAP_PRECISION,
    HOT_MOMENTUM,
    MIN_FORM_MAPS,
    STREAK_MIN,
)
from .form import RecentForm, analyze_recent_form
from .head_to_head import HeadToHead, calculate_head_to_head
from .normalize import normalize_maps


@dataclass(frozen=True)
class Insight:
    type: str
    text: str


def _spread(rates: List[float], mean: float) -> float:
    return math.sqrt(sum((r - mean) ** 2 for r in rates) / len(rates))


def _advantage_insights(team_a: str, team_b: str, common: CommonOpponentAnalysis) -> List[Insight]:
    s = common.summary
    if s.common_count == 0:
        return []
    if s.team1_advantages > s.team2_advantages:
        return [
            Insight(
                "advantage",
                f"{team_a} has shown stronger form against common opponents: "
                f"{s.team1_advantages} vs {s.team2_advantages} clear advantages.",
            )
        ]
    if s.team2_advantages > s.team1_advantages:
        return [
            Insight(
                "advantage",
                f"{team_b} has the edge in common-opponent matchups: "
                f"{s.team2_advantages} vs {s.team1_advantages} clear advantages.",
            )
        ]
    return []


def _consistency_insights(team_a: str, team_b: str, common: CommonOpponentAnalysis) -> List[Insight]:
    if len(common.breakdown) < 2:
        return []
    s = common.summary
    std_a = _spread([b.team1_result.win_rate for b in common.breakdown], s.team1_avg_dominance)
    std_b = _spread([b.team2_result.win_rate for b in common.breakdown], s.team2_avg_dominance)
    gap = round(std_b - std_a, GAP_PRECISION)
    if gap >= CONSISTENCY_GAP:
        return [
            Insight(
                "consistency",
                f"{team_a} brings higher consistency; their results vs common opponents "
                f"show less variance than {team_b}'s.",
            )
        ]
    if -gap >= CONSISTENCY_GAP:
        return [
            Insight(
                "consistency",
                f"{team_b} are the more consistent side; {team_a}'s form has been more unpredictable.",
            )
        ]
    return []


def _momentum_insights(team_a: str, team_b: str, form_a: RecentForm, form_b: RecentForm) -> List[Insight]:
    if form_a.total_maps < MIN_FORM_MAPS or form_b.total_maps < MIN_FORM_MAPS:
        return []

    out: List[Insight] = []
    a_hot = form_a.momentum > HOT_MOMENTUM
    b_hot = form_b.momentum > HOT_MOMENTUM
    a_cold = form_a.momentum < COLD_MOMENTUM
    b_cold = form_b.momentum < COLD_MOMENTUM

    if a_hot and b_cold:
        out.append(
            Insight(
                "momentum",
                f"{team_a} are riding strong momentum into this match, while {team_b} have struggled recently.",
            )
        )
    elif b_hot and a_cold:
        out.append(
            Insight(
                "momentum",
                f"{team_b} come in with excellent recent form; {team_a} will be looking to arrest a difficult patch.",
            )
        )
    elif form_a.trend == "rising" and form_b.trend == "falling":
        out.append(
            Insight(
                "momentum",
                f"{team_a} are trending upward heading into this match; {team_b} have seen their form dip recently.",
            )
        )
    elif form_b.trend == "rising" and form_a.trend == "falling":
        out.append(
            Insight(
                "momentum",
                f"{team_b} are the in-form side right now, with {team_a} looking to turn things around.",
            )
        )

    if form_a.streak_type == "W" and form_a.streak >= STREAK_MIN:
        out.append(
            Insight(
                "momentum",
                f"{team_a} enter on a {form_a.streak}-map winning streak; confidence should be high.",
            )
        )
    if form_b.streak_type == "W" and form_b.streak >= STREAK_MIN:
        out.append(
            Insight(
                "momentum",
                f"{team_b} bring a {form_b.streak}-map winning streak into this matchup.",
            )
        )
    return out


def _history_insight(team_a: str, team_b: str, h2h: HeadToHead) -> Insight:
    if h2h.total_maps == 0:
        return Insight(
            "history",
            "No prior meetings between these teams in tournament data; this matchup is an open book.",
        )
    if h2h.team_a_wins > h2h.team_b_wins:
        return Insight(
            "history",
            f"{team_a} leads the head-to-head {h2h.team_a_wins}-{h2h.team_b_wins} in tournament maps played.",
        )
    if h2h.team_b_wins > h2h.team_a_wins:
        return Insight(
            "history",
            f"{team_b} has the historical edge, leading {h2h.team_b_wins}-{h2h.team_a_wins} in previous meetings.",
        )
    return Insight(
        "history",
        f"These teams are perfectly matched: {h2h.team_a_wins} maps each in previous encounters.",
    )


def generate_caster_insights(team_a: str, team_b: str, maps: Iterable[Any]) -> List[Insight]:
    """Talking points in broadcast order: advantage, consistency, momentum, history.

    The history point is always present, so the list is never empty.
    """
    records = normalize_maps(maps)
    common = analyze_common_opponents(team_a, team_b, records)
    form_a = analyze_recent_form(team_a, records)
    form_b = analyze_recent_form(team_b, records)
    h2h = calculate_head_to_head(team_a, team_b, records)

    insights: List[Insight] = []
    insights.extend(_advantage_insights(team_a, team_b, common))
    insights.extend(_consistency_insights(team_a, team_b, common))
    insights.extend(_momentum_insights(team_a, team_b, form_a, form_b))
    insights.append(_history_insight(team_a, team_b, h2h))
    return insights
