from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
import logging
from datetime import datetime
import traceback

from skillpulse.config import settings
from skillpulse.database import init_db, get_db_context, engine
from skillpulse.exceptions import SkillPulseError, ValidationError
from skillpulse.api.api_v1 import api_router
from skillpulse.schemas import HealthCheck
from skillpulse.utils.seed_data import seed_database

# Configure logging
handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    description="""
    SkillPulse API

    Tracks how a team's skill levels change from week to week.

    * **Team members and skills**: manage the rows and columns of the skill matrix
    * **Snapshots**: one per week, exactly one of them is the current week
    * **Assessments**: a level from 0 (unknown) to 3 (expert) per member, skill and week
    * **Dashboard**: skill matrix, weekly comparison, growth history, team stats, top skills
    * **Reports**: weekly and monthly growth reports
    * **Export**: skill matrix as CSV or Excel
    """,
)

# Add middlewares
app.add_middleware(GZipMiddleware, minimum_size=1000)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Include API router
app.include_router(api_router)

# ================== Error handlers ==================
def error_response(request: Request, status_code: int, message: str, details=None) -> JSONResponse:
    content = {
        "error": True,
        "code": status_code,
        "message": message,
        "path": request.url.path,
        "timestamp": datetime.utcnow().isoformat()
    }
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTPException: {exc.status_code} - {exc.detail}")
    return error_response(request, exc.status_code, str(exc.detail))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    details = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {details}")
    return error_response(request, 422, "Validation error", details)

@app.exception_handler(SkillPulseError)
async def skillpulse_exception_handler(request: Request, exc: SkillPulseError):
    """Handle domain errors raised by crud and services"""
    logger.warning(f"{type(exc).__name__}: {exc.status_code} - {exc.message}")
    details = [exc.to_dict()] if isinstance(exc, ValidationError) else None
    return error_response(request, exc.status_code, exc.message, details)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    if settings.DEBUG:
        detail = str(exc)
    else:
        detail = "Internal server error"

    return error_response(request, 500, detail)

# ================== Service endpoints ==================
@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Health check for load balancers and monitoring"""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "service": "skillpulse-backend",
        "version": settings.VERSION,
        "timestamp": datetime.utcnow().isoformat(),
        "database": database
    }

@app.get("/version")
async def get_version():
    """Get application version information"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "api_version": "v1",
        "documentation": "/docs"
    }

@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")

@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)

# ================== Startup / shutdown ==================
def _masked_database_url(db_url: str) -> str:
    """Hide the password part of a database URL"""
    if '@' not in db_url:
        return db_url
    credentials, host = db_url.rsplit('@', 1)
    scheme, _, userinfo = credentials.partition('://')
    user = userinfo.split(':', 1)[0]
    return f"{scheme}://{user}:****@{host}"

@app.on_event("startup")
async def startup_event():
    """Create tables and load demo data"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database URL: {_masked_database_url(settings.DATABASE_URL)}")

    init_db()

    if settings.SEED_DATABASE:
        with get_db_context() as db:
            if seed_database(db):
                logger.info("Demo data loaded")

@app.on_event("shutdown")
async def shutdown_event():
    """Actions to perform on application shutdown"""
    logger.info(f"Shutting down {settings.PROJECT_NAME} backend")
