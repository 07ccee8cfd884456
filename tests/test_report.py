import json

from caster.cli import main
from caster.qwstats_client import GlobalStats, SlotResult
from caster.render import render_text
from caster.report import build_caster_report


def _map(team1: str, team2: str, score1: int, score2: int, date: str, players=None) -> dict:
    return {
        "team1": team1,
        "team2": team2,
        "score1": score1,
        "score2": score2,
        "map": "dm3",
        "date": date,
        "players": players or [],
    }


def _dataset() -> list:
    roster = [
        {"name": "a1", "team": "Alpha", "frags": 30, "deaths": 10},
        {"name": "b1", "team": "Beta", "frags": 10, "deaths": 20},
        {"name": "g1", "team": "Gamma", "frags": 90, "deaths": 1},
    ]
    return [
        _map("Alpha", "Beta", 10, 5, "2024-01-01", roster),
        _map("Alpha", "Gamma", 8, 3, "2024-01-02", roster),
        _map("Gamma", "Beta", 9, 2, "2024-01-03", roster),
    ]


def test_report_sections_and_json_ready() -> None:
    report = build_caster_report("Alpha", "Beta", _dataset())

    assert report["meta"]["maps_analyzed"] == 3
    assert report["head_to_head"]["total_maps"] == 1
    assert report["form"]["team_a"]["record"] == "2W-0L"
    assert report["form"]["team_b"]["momentum_label"] == "Poor"
    assert report["common_opponents"]["summary"]["common_count"] == 1
    assert report["map_stats"]["team_a"]["dm3"]["played"] == 2
    assert report["insights"][-1]["type"] == "history"
    assert report["global"] is None
    json.dumps(report)


def test_spotlight_only_ranks_the_two_teams() -> None:
    report = build_caster_report("Alpha", "Beta", _dataset())
    names = [p["name"] for p in report["spotlight"]["hot_hands"]]
    assert names == ["a1", "b1"]
    assert [p["name"] for p in report["spotlight"]["struggling"]] == ["b1", "a1"]


def test_report_with_partial_global_stats() -> None:
    stats = GlobalStats(
        slots={
            "h2h": SlotResult(payload={"games": [{"team": "alpha", "result": "W"}]}),
            "form1": SlotResult(error="QW Stats API 500: /api/form"),
        }
    )
    report = build_caster_report("Alpha", "Beta", _dataset(), global_stats=stats)
    assert report["global"]["h2h"]["team_a_wins"] == 1
    assert report["global"]["errors"] == {"form1": "QW Stats API 500: /api/form"}
    assert "H2H 12mo: 1-0 of 1 maps" in render_text(report)


def test_render_text_lists_talking_points() -> None:
    text = render_text(build_caster_report("Alpha", "Beta", _dataset()))
    assert text.startswith("CASTER INSIGHTS")
    assert "Alpha vs Beta" in text
    assert "Talking Points" in text
    assert "[history] Alpha leads the head-to-head 1-0" in text


def test_cli_writes_json_report(tmp_path) -> None:
    maps_path = tmp_path / "maps.json"
    maps_path.write_text(json.dumps({"rawMaps": _dataset()}), encoding="utf-8")
    out_path = tmp_path / "report.json"

    main([
        "--maps", str(maps_path),
        "--team-a", "Alpha",
        "--team-b", "Beta",
        "--output", str(out_path),
        "--output-format", "json",
    ])

    report = json.loads(out_path.read_text(encoding="utf-8"))
    assert report["head_to_head"]["team_a_wins"] == 1
