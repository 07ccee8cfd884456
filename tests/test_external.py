from caster.external import (
    extract_players,
    extract_rows,
    summarize_form,
    summarize_global,
    summarize_h2h,
    summarize_roster,
)
from caster.qwstats_client import GlobalStats, SlotResult


def test_extract_rows_accepts_the_three_shapes() -> None:
    rows = [{"result": "W"}]
    assert extract_rows(rows) == rows
    assert extract_rows({"matches": rows}) == rows
    assert extract_rows({"games": rows}) == rows
    assert extract_rows({"matches": None, "games": rows}) == rows


def test_extract_rows_degrades_to_empty() -> None:
    assert extract_rows(None) == []
    assert extract_rows("oops") == []
    assert extract_rows({"data": [1, 2]}) == []
    assert extract_rows([1, "x", {"result": "L"}]) == [{"result": "L"}]


def test_extract_players_shapes() -> None:
    assert extract_players({"roster": [{"name": "a"}]}) == [{"name": "a"}]
    assert extract_players({"players": [{"name": "b"}]}) == [{"name": "b"}]


def test_summarize_h2h_counts_team_a_wins() -> None:
    payload = {
        "matches": [
            {"team": "]SR[", "result": "w"},
            {"teamA": "pol", "result": "W"},
            {"team": "]sr[", "result": "L"},
        ]
    }
    assert summarize_h2h(payload, "]sr[") == {"maps": 3, "team_a_wins": 1, "team_b_wins": 2}


def test_summarize_form() -> None:
    payload = [{"result": "W"}, {"result": "l"}, {"result": None}, {"result": "W"}]
    assert summarize_form(payload) == {"maps": 4, "wins": 2, "losses": 1}


def test_summarize_roster_fallbacks() -> None:
    payload = [
        {"nick": "bps", "kdRatio": "1.5"},
        {"player": "xyz", "efficiency": 0.8},
        {"kd": "n/a"},
    ]
    assert summarize_roster(payload) == [
        {"name": "bps", "kd": 1.5},
        {"name": "xyz", "kd": 0.8},
        {"name": "?", "kd": None},
    ]


def test_summarize_global_marks_failed_slots() -> None:
    stats = GlobalStats(
        slots={
            "h2h": SlotResult(payload=[{"team": "alpha", "result": "W"}]),
            "form1": SlotResult(error="QW Stats API 500: /api/form"),
        }
    )
    summary = summarize_global(stats, "alpha")
    assert summary["h2h"] == {"maps": 1, "team_a_wins": 1, "team_b_wins": 0}
    assert summary["form1"] is None
    assert summary["roster1"] is None
    assert summary["errors"] == {"form1": "QW Stats API 500: /api/form"}
    assert summary["all_failed"] is False
