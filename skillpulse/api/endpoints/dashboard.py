from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
import logging

from skillpulse.deps import get_aggregation_service
from skillpulse.schemas import (
    SkillMatrixResponse, WeeklyComparisonResponse, GrowthPerSkillResponse,
    TeamStatsResponse, TopSkill
)
from skillpulse.services import AggregationService
from skillpulse.utils.export import export_skill_matrix_csv, export_skill_matrix_excel

router = APIRouter(tags=["dashboard"])
logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

@router.get("/skill-matrix", response_model=SkillMatrixResponse)
async def get_skill_matrix(service: AggregationService = Depends(get_aggregation_service)):
    """Current level of every team member in every skill"""
    return service.get_skill_matrix()

@router.get("/skill-matrix/export")
async def export_skill_matrix(
    format: str = Query("csv", pattern="^(csv|xlsx)$", description="Export file format"),
    service: AggregationService = Depends(get_aggregation_service)
):
    """Download the skill matrix as CSV or Excel"""
    matrix = service.get_skill_matrix()

    if format == "xlsx":
        output = export_skill_matrix_excel(matrix)
    else:
        output = export_skill_matrix_csv(matrix)

    filename = f"skill_matrix_{datetime.utcnow().date()}.{format}"
    logger.info(f"Exporting skill matrix as {format}: {len(matrix['members'])} members")

    return StreamingResponse(
        output,
        media_type=EXPORT_MEDIA_TYPES[format],
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

@router.get("/weekly-comparison", response_model=WeeklyComparisonResponse)
async def get_weekly_comparison(service: AggregationService = Depends(get_aggregation_service)):
    """Per-skill averages of the current and previous week"""
    return service.get_weekly_comparison()

@router.get("/growth-per-skill", response_model=GrowthPerSkillResponse)
async def get_growth_per_skill(
    weeks: Optional[int] = Query(None, ge=1, le=52, description="Number of recent snapshots"),
    service: AggregationService = Depends(get_aggregation_service)
):
    """Per-skill averages across recent snapshots, oldest first"""
    return service.get_growth_per_skill(weeks)

@router.get("/team-stats", response_model=TeamStatsResponse)
async def get_team_stats(service: AggregationService = Depends(get_aggregation_service)):
    return service.get_team_stats()

@router.get("/top-skills", response_model=List[TopSkill])
async def get_top_skills(service: AggregationService = Depends(get_aggregation_service)):
    """Skills ranked by current average level"""
    return service.get_top_skills()
