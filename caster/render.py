from __future__ import annotations

from typing import Any, Dict, List


def _map_lines(stats: Dict[str, Any]) -> List[str]:
    lines = []
    for name, s in stats.items():
        lines.append(
            f"  {name}: {s.get('wins', 0)}W-{s.get('losses', 0)}L of {s.get('played', 0)} | "
            f"wr {s.get('win_rate', 0):.2f} | avg diff {s.get('avg_frag_diff', 0):+d}"
        )
    return lines or ["  no maps"]


def _player_line(p: Dict[str, Any]) -> str:
    line = (
        f"  {p.get('name')} ({p.get('team')}) | K/D {p.get('kd_ratio')} | "
        f"{p.get('frags_per_map')}/map | {p.get('trend')}"
    )
    if p.get("has_detailed_stats"):
        line += f" | eff {p.get('eff_pct')}% | dmg {p.get('avg_dmg')} | RL {p.get('rl_taken')}/map"
    return line


def render_text(report: Dict[str, Any]) -> str:
    meta = report.get("meta", {})
    h2h = report.get("head_to_head", {})
    form = report.get("form", {})
    common = report.get("common_opponents", {}).get("summary", {})
    map_stats = report.get("map_stats", {})
    spotlight = report.get("spotlight", {})
    team_a = meta.get("team_a")
    team_b = meta.get("team_b")

    lines = []
    lines.append("CASTER INSIGHTS")
    lines.append(f"{team_a} vs {team_b} | Maps in dataset: {meta.get('maps_analyzed', 0)}")
    lines.append("")

    lines.append("Talking Points")
    for i in report.get("insights", []):
        lines.append(f"- [{i.get('type')}] {i.get('text')}")
    lines.append("")

    lines.append("Head to Head")
    lines.append(
        f"Maps: {h2h.get('total_maps', 0)} | {team_a} {h2h.get('team_a_wins', 0)} - "
        f"{h2h.get('team_b_wins', 0)} {team_b} | Frags {h2h.get('team_a_frags', 0)}:{h2h.get('team_b_frags', 0)}"
    )
    for m in h2h.get("per_map", []):
        lines.append(f"  {m.get('map')} {m.get('date')}: {m.get('score1')}-{m.get('score2')}")
    lines.append("")

    lines.append("Recent Form")
    for side, name in (("team_a", team_a), ("team_b", team_b)):
        f = form.get(side, {})
        streak = f"{f.get('streak', 0)}{f.get('streak_type') or ''}"
        lines.append(
            f"{name}: {f.get('record')} | momentum {f.get('momentum', 0.5):.2f} "
            f"({f.get('momentum_label')}) | trend {f.get('trend')} | streak {streak}"
        )
    lines.append("")

    lines.append("Common Opponents")
    lines.append(
        f"Shared: {common.get('common_count', 0)} | advantages {common.get('team1_advantages', 0)}"
        f"-{common.get('team2_advantages', 0)} | dominance "
        f"{common.get('team1_avg_dominance', 0.5):.2f}/{common.get('team2_avg_dominance', 0.5):.2f}"
    )
    lines.append("")

    lines.append("Maps")
    lines.append(f"{team_a}")
    lines.extend(_map_lines(map_stats.get("team_a", {})))
    lines.append(f"{team_b}")
    lines.extend(_map_lines(map_stats.get("team_b", {})))
    lines.append("")

    lines.append("Player Spotlight")
    lines.append("Hot hands")
    lines.extend(_player_line(p) for p in spotlight.get("hot_hands", []))
    lines.append("Struggling")
    lines.extend(_player_line(p) for p in spotlight.get("struggling", []))

    global_stats = report.get("global")
    if global_stats:
        lines.append("")
        lines.append("Global (QW stats)")
        if global_stats.get("all_failed"):
            lines.append("  unavailable")
        else:
            h = global_stats.get("h2h")
            if h:
                lines.append(f"  H2H 12mo: {h['team_a_wins']}-{h['team_b_wins']} of {h['maps']} maps")
            for key, name in (("form1", team_a), ("form2", team_b)):
                g = global_stats.get(key)
                if g:
                    lines.append(f"  {name} 6mo: {g['wins']}W-{g['losses']}L of {g['maps']} maps")

    return "\n".join(lines)
