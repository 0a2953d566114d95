"""
Configuration settings for SkillPulse application
"""
from typing import List, Optional, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator
from dotenv import load_dotenv
# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Application
    PROJECT_NAME: str = "SkillPulse"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development, staging, production
    DEBUG: bool = False  # exposes unhandled exception text in 500 responses

    # API
    API_V1_STR: str = "/api/v1"
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Database
    DATABASE_URL: str = "sqlite:///./skillpulse.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40
    DATABASE_POOL_RECYCLE: int = 3600
    DATABASE_ECHO: bool = False

    # Seed data
    SEED_DATABASE: bool = True

    # Aggregations and reports
    GROWTH_HISTORY_WEEKS: int = 4
    MONTHLY_REPORT_SNAPSHOTS: int = 5
    REPORT_TOP_SKILLS_LIMIT: int = 10
    REPORT_HIGHLIGHT_LIMIT: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("GROWTH_HISTORY_WEEKS", "MONTHLY_REPORT_SNAPSHOTS")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Snapshot windows must cover at least one snapshot")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

# Create settings instance
settings = Settings()

# Export settings
__all__ = ["settings", "Settings"]
