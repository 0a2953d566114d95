from skillpulse.services.aggregation_service import AggregationService
from skillpulse.services.report_service import ReportService

__all__ = ["AggregationService", "ReportService"]
