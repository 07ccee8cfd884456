from __future__ import annotations

import argparse
import json
import logging
from typing import Any, List, Optional

from dotenv import load_dotenv

from .config import FORM_WINDOW, stats_api_config_from_env
from .normalize import normalize_maps, normalize_team
from .qwstats_client import GlobalStats, QWStatsClient, fetch_global_stats
from .render import render_text
from .report import build_caster_report


def _load_maps(path: str) -> List[Any]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("maps") or raw.get("rawMaps") or []
    if not isinstance(raw, list):
        raise SystemExit(f"{path} does not contain a list of map records.")
    return raw


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pre-match caster insights from tournament map results")
    parser.add_argument("--maps", required=True, help="Path to a JSON file of map records")
    parser.add_argument("--team-a", required=True, help="First team name")
    parser.add_argument("--team-b", required=True, help="Second team name")
    parser.add_argument("--last-n", type=int, default=FORM_WINDOW, help="Recent form window in maps")
    parser.add_argument("--global", dest="use_global", action="store_true", help="Query the QW stats API")
    parser.add_argument("--tag-a", default=None, help="Stats API tag for team A (defaults to name)")
    parser.add_argument("--tag-b", default=None, help="Stats API tag for team B (defaults to name)")
    parser.add_argument("--output", default=None, help="Path to output report JSON/text")
    parser.add_argument(
        "--output-format", choices=["json", "text"], default="text", help="Output format"
    )
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if normalize_team(args.team_a) == normalize_team(args.team_b):
        raise SystemExit("Pick two different teams.")

    maps = normalize_maps(_load_maps(args.maps))

    global_stats: Optional[GlobalStats] = None
    tag_a = args.tag_a or args.team_a
    tag_b = args.tag_b or args.team_b
    if args.use_global:
        config = stats_api_config_from_env()
        if config.enabled:
            global_stats = fetch_global_stats(QWStatsClient(config), tag_a, tag_b)

    report = build_caster_report(
        args.team_a,
        args.team_b,
        maps,
        global_stats=global_stats,
        tag_a=tag_a,
        last_n=args.last_n,
    )

    if args.output_format == "json":
        output_text = json.dumps(report, indent=2)
    else:
        output_text = render_text(report)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)


if __name__ == "__main__":
    main()
