"""Use case for generating caster reports."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List

from caster.config import FORM_WINDOW
from caster.normalize import normalize_maps, normalize_team
from caster.qwstats_client import GlobalStats
from caster.report import build_caster_report

from ..ports.global_stats import GlobalStatsPort

logger = logging.getLogger(__name__)

# Thread pool for the blocking stats-service fan-out
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class GenerateCasterReportRequest:
    """Request to generate a caster report."""

    team_a: str
    team_b: str
    maps: List[Dict[str, Any]] = field(default_factory=list)
    last_n: int = FORM_WINDOW
    include_global: bool = False
    tag_a: str | None = None
    tag_b: str | None = None


@dataclass
class GenerateCasterReportResult:
    """Result of report generation."""

    success: bool
    report: Dict[str, Any] | None = None
    error: str | None = None
    metadata: Dict[str, Any] | None = None


class GenerateCasterReportUseCase:
    """Use case for generating caster reports.

    This orchestrates the process of:
    1. Normalizing the supplied map records
    2. Optionally fetching global numbers from the stats service
    3. Building the report from local data plus whichever global panels succeeded
    """

    def __init__(self, global_stats: GlobalStatsPort | None = None):
        self._global_stats = global_stats

    async def execute(self, request: GenerateCasterReportRequest) -> GenerateCasterReportResult:
        """Execute the report generation use case.

        Args:
            request: Report generation request

        Returns:
            Report generation result
        """
        if normalize_team(request.team_a) == normalize_team(request.team_b):
            raise ValueError("teamA and teamB must be different teams")

        maps = normalize_maps(request.maps)
        logger.info(f"Building caster report for {request.team_a} vs {request.team_b} from {len(maps)} maps")

        global_stats: GlobalStats | None = None
        tag_a = request.tag_a or request.team_a
        tag_b = request.tag_b or request.team_b
        if request.include_global and self._global_stats and self._global_stats.enabled:
            loop = asyncio.get_running_loop()
            global_stats = await loop.run_in_executor(
                _executor, self._global_stats.fetch_matchup_stats, tag_a, tag_b
            )
            if global_stats.all_failed:
                logger.warning(f"All global stats queries failed: {global_stats.first_error}")

        report = build_caster_report(
            request.team_a,
            request.team_b,
            maps,
            global_stats=global_stats,
            tag_a=tag_a,
            last_n=request.last_n,
        )

        return GenerateCasterReportResult(
            success=True,
            report=report,
            metadata={
                "team_a": request.team_a,
                "team_b": request.team_b,
                "maps_supplied": len(request.maps),
                "maps_analyzed": len(maps),
                "global_requested": request.include_global,
            },
        )
