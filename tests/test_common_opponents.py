import pytest

from caster.common_opponents import (
    analyze_common_opponents,
    get_opponents,
    performance_vs_opponent,
)


def _map(team1: str, team2: str, score1: int, score2: int) -> dict:
    return {"team1": team1, "team2": team2, "score1": score1, "score2": score2, "map": "dm3"}


def test_clear_advantage_to_team_a() -> None:
    maps = [_map("Alpha", "Gamma", 10, 2) for _ in range(3)]
    maps += [_map("Gamma", "Beta", 10, 2) for _ in range(3)]

    analysis = analyze_common_opponents("Alpha", "Beta", maps)

    assert [b.opponent for b in analysis.breakdown] == ["gamma"]
    entry = analysis.breakdown[0]
    assert entry.team1_result.dominance == 1.0
    assert entry.team2_result.dominance == 0.0
    assert entry.advantage == "team1"
    assert analysis.summary.common_count == 1
    assert analysis.summary.team1_advantages == 1
    assert analysis.summary.team2_advantages == 0


def test_small_gap_is_even() -> None:
    maps = [
        _map("Alpha", "Gamma", 5, 1),
        _map("Alpha", "Gamma", 1, 5),
        _map("Beta", "Gamma", 5, 1),
        _map("gamma", "beta", 5, 1),
    ]
    analysis = analyze_common_opponents("Alpha", "Beta", maps)
    assert analysis.breakdown[0].advantage == "even"


def test_advantage_to_team_b() -> None:
    maps = [
        _map("Alpha", "Gamma", 5, 1),
        _map("Alpha", "Gamma", 1, 5),
        _map("Beta", "Gamma", 5, 1),
        _map("Beta", "Gamma", 5, 1),
    ]
    analysis = analyze_common_opponents("Alpha", "Beta", maps)
    assert analysis.breakdown[0].advantage == "team2"
    assert analysis.summary.team1_avg_dominance == pytest.approx(0.5)
    assert analysis.summary.team2_avg_dominance == pytest.approx(1.0)


def test_neither_team_appears_in_its_own_breakdown() -> None:
    maps = [
        _map("Alpha", "Beta", 3, 1),
        _map("Alpha", "alpha", 3, 1),
        _map("Beta", "BETA", 3, 1),
        _map("Alpha", "Gamma", 3, 1),
        _map("Beta", "Gamma", 3, 1),
    ]
    analysis = analyze_common_opponents("alpha", "Beta ", maps)
    opponents = [b.opponent for b in analysis.breakdown]
    assert opponents == ["gamma"]
    assert "alpha" not in get_opponents("Alpha", maps)


def test_no_common_opponents_uses_neutral_prior() -> None:
    analysis = analyze_common_opponents("Alpha", "Beta", [_map("Alpha", "Gamma", 3, 1)])
    assert analysis.breakdown == []
    assert analysis.summary.common_count == 0
    assert analysis.summary.team1_avg_dominance == 0.5
    assert analysis.summary.team2_avg_dominance == 0.5


def test_performance_vs_one_opponent() -> None:
    maps = [
        _map("Alpha", "Gamma", 10, 3),
        _map("Gamma", "Alpha", 6, 5),
        _map("Alpha", "Gamma", 4, 4),
        _map("Alpha", "Delta", 50, 0),
    ]
    record = performance_vs_opponent("Alpha", "GAMMA", maps)
    assert (record.wins, record.losses, record.total) == (1, 1, 3)
    assert record.frag_diff == 6
    assert record.avg_score == 6
    assert record.win_rate == pytest.approx(1 / 3)


def test_breakdown_order_is_deterministic() -> None:
    maps = []
    for opp in ("Zeta", "Delta", "Gamma"):
        maps += [_map("Alpha", opp, 1, 0), _map("Beta", opp, 0, 1)]
    first = analyze_common_opponents("Alpha", "Beta", maps)
    second = analyze_common_opponents("Alpha", "Beta", list(reversed(maps)))
    assert [b.opponent for b in first.breakdown] == ["delta", "gamma", "zeta"]
    assert first == second


def test_gap_of_exactly_threshold_is_an_advantage() -> None:
    # 7/20 vs 1/5 is a 0.15 gap
    maps = [_map("Alpha", "Gamma", 5, 1) for _ in range(7)]
    maps += [_map("Alpha", "Gamma", 1, 5) for _ in range(13)]
    maps += [_map("Beta", "Gamma", 5, 1)]
    maps += [_map("Beta", "Gamma", 1, 5) for _ in range(4)]

    entry = analyze_common_opponents("Alpha", "Beta", maps).breakdown[0]

    assert entry.team1_result.dominance == pytest.approx(0.35)
    assert entry.team2_result.dominance == pytest.approx(0.2)
    assert entry.advantage == "team1"
