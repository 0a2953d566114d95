"""
Dependency injection module for FastAPI
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from skillpulse.database import get_db
from skillpulse.services import AggregationService, ReportService

def get_aggregation_service(db: Session = Depends(get_db)) -> AggregationService:
    """Dependency for the aggregation service bound to the request session"""
    return AggregationService(db)

def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    """Dependency for the report service bound to the request session"""
    return ReportService(db)

__all__ = ["get_db", "get_aggregation_service", "get_report_service"]
