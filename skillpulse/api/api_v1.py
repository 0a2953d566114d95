from datetime import datetime
from fastapi import APIRouter

from skillpulse.config import settings
from skillpulse.schemas import HTTPError
from skillpulse.api.endpoints import (
    team_members, skills, snapshots, assessments, settings as settings_endpoints,
    dashboard, reports
)

api_router = APIRouter(
    prefix=settings.API_V1_STR,
    responses={404: {"model": HTTPError}, 422: {"model": HTTPError}},
)

# Include all endpoint routers
api_router.include_router(team_members.router)
api_router.include_router(skills.router)
api_router.include_router(snapshots.router)
api_router.include_router(assessments.router)
api_router.include_router(settings_endpoints.router)
api_router.include_router(dashboard.router)
api_router.include_router(reports.router)

# Health check endpoint
@api_router.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "skillpulse-backend",
        "version": settings.VERSION,
        "timestamp": datetime.utcnow().isoformat(),
    }

# Root endpoint
@api_router.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs",
        "endpoints": {
            "team_members": f"{settings.API_V1_STR}/team-members",
            "skills": f"{settings.API_V1_STR}/skills",
            "snapshots": f"{settings.API_V1_STR}/snapshots",
            "assessments": f"{settings.API_V1_STR}/assessments",
            "skill_matrix": f"{settings.API_V1_STR}/skill-matrix",
            "reports": f"{settings.API_V1_STR}/reports",
        }
    }
