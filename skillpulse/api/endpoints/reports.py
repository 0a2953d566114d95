from fastapi import APIRouter, Depends
import logging

from skillpulse.deps import get_report_service
from skillpulse.schemas import ReportResponse
from skillpulse.services import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)

@router.get("/weekly", response_model=ReportResponse)
async def get_weekly_report(service: ReportService = Depends(get_report_service)):
    """Current week against the previous snapshot"""
    return service.generate_weekly_report()

@router.get("/monthly", response_model=ReportResponse)
async def get_monthly_report(service: ReportService = Depends(get_report_service)):
    """Current week against the oldest of the recent snapshots"""
    return service.generate_monthly_report()
