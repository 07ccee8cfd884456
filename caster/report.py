from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

from .common_opponents import analyze_common_opponents
from .config import FORM_WINDOW, SPOTLIGHT_MIN_MAPS
from .external import summarize_global
from .form import analyze_recent_form
from .head_to_head import calculate_head_to_head
from .insights import generate_caster_insights
from .map_stats import calculate_map_stats
from .normalize import normalize_maps
from .players import calculate_player_stats, get_player_spotlight, players_for_teams
from .qwstats_client import GlobalStats


def build_caster_report(
    team_a: str,
    team_b: str,
    maps: Iterable[Any],
    global_stats: Optional[GlobalStats] = None,
    tag_a: Optional[str] = None,
    last_n: int = FORM_WINDOW,
    min_maps: int = SPOTLIGHT_MIN_MAPS,
) -> Dict[str, Any]:
    records = normalize_maps(maps)

    h2h = calculate_head_to_head(team_a, team_b, records)
    form_a = analyze_recent_form(team_a, records, last_n=last_n)
    form_b = analyze_recent_form(team_b, records, last_n=last_n)
    common = analyze_common_opponents(team_a, team_b, records)
    map_stats_a = calculate_map_stats(team_a, records)
    map_stats_b = calculate_map_stats(team_b, records)

    # spotlight only ranks players from the two sides
    player_stats = calculate_player_stats(records)
    spotlight = get_player_spotlight(players_for_teams(player_stats, team_a, team_b), min_maps=min_maps)

    insights = generate_caster_insights(team_a, team_b, records)

    return {
        "meta": {
            "team_a": team_a,
            "team_b": team_b,
            "maps_analyzed": len(records),
            "form_window": last_n,
        },
        "head_to_head": asdict(h2h),
        "form": {
            "team_a": form_a.to_dict(),
            "team_b": form_b.to_dict(),
        },
        "common_opponents": common.to_dict(),
        "map_stats": {
            "team_a": {name: s.to_dict() for name, s in sorted(map_stats_a.items())},
            "team_b": {name: s.to_dict() for name, s in sorted(map_stats_b.items())},
        },
        "spotlight": {
            "hot_hands": [p.to_dict() for p in spotlight.hot_hands],
            "struggling": [p.to_dict() for p in spotlight.struggling],
        },
        "insights": [asdict(i) for i in insights],
        "global": summarize_global(global_stats, tag_a or team_a) if global_stats else None,
    }
