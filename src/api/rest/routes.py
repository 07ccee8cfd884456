"""REST API routes for caster insights."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from caster.config import FORM_WINDOW
from caster.insights import generate_caster_insights
from caster.normalize import normalize_team

from ...application.use_cases.generate_caster_report import (
    GenerateCasterReportRequest,
    GenerateCasterReportUseCase,
)
from ...infrastructure.adapters.qwstats_adapter import QWStatsAdapter

router = APIRouter(prefix="/api/caster", tags=["caster"])


class MatchupRequest(BaseModel):
    """Request body for a two-team matchup."""

    team_a: str = Field(
        ...,
        alias="teamA",
        description="First team name",
        min_length=1,
    )
    team_b: str = Field(
        ...,
        alias="teamB",
        description="Second team name",
        min_length=1,
    )
    maps: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Completed map records for the active tournament/division",
    )

    class Config:
        populate_by_name = True


class ReportRequest(MatchupRequest):
    """Request body for a full caster report."""

    last_n: int = Field(
        default=FORM_WINDOW,
        alias="lastN",
        ge=1,
        le=50,
        description="Recent form window in maps",
    )
    include_global: bool = Field(
        default=False,
        alias="includeGlobal",
        description="Also query the QW stats API",
    )
    tag_a: Optional[str] = Field(default=None, alias="tagA", description="Stats API tag for team A")
    tag_b: Optional[str] = Field(default=None, alias="tagB", description="Stats API tag for team B")


_adapter: Optional[QWStatsAdapter] = None


def _global_stats_adapter() -> QWStatsAdapter:
    """Shared stats-service adapter; one HTTP session for the whole process."""
    global _adapter
    if _adapter is None:
        _adapter = QWStatsAdapter()
    return _adapter


def _error(status_code: int, code: str, message: str, details: Optional[dict] = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


@router.post("/report")
async def generate_report(request: ReportRequest):
    """Generate the full caster report for a matchup.

    Args:
        request: Teams, map records and options

    Returns:
        Caster report with local statistics, talking points and optional global panels
    """
    try:
        adapter = _global_stats_adapter() if request.include_global else None
        use_case = GenerateCasterReportUseCase(adapter)
        result = await use_case.execute(
            GenerateCasterReportRequest(
                team_a=request.team_a,
                team_b=request.team_b,
                maps=request.maps,
                last_n=request.last_n,
                include_global=request.include_global,
                tag_a=request.tag_a,
                tag_b=request.tag_b,
            )
        )
        return result.report

    except ValueError as e:
        raise _error(400, "INVALID_REQUEST", str(e))
    except Exception as e:
        raise _error(500, "INTERNAL_ERROR", f"Error generating report: {str(e)}")


@router.post("/insights")
async def generate_insights(request: MatchupRequest):
    """Talking points only, in broadcast order."""
    if normalize_team(request.team_a) == normalize_team(request.team_b):
        raise _error(400, "INVALID_REQUEST", "teamA and teamB must be different teams")
    insights = generate_caster_insights(request.team_a, request.team_b, request.maps)
    return {"insights": [{"type": i.type, "text": i.text} for i in insights]}
