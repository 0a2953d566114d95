"""
Pydantic schemas for request/response validation
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, date
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from skillpulse.models import SkillLevel

HEX_COLOR_PATTERN = r'^#[0-9A-Fa-f]{6}$'

# ========== Base Schemas ==========

class BaseSchema(BaseModel):
    """Base schema with common config; camelCase on the wire, snake_case in Python"""
    class Config:
        from_attributes = True  # Allows ORM mode (formerly orm_mode)
        populate_by_name = True
        alias_generator = to_camel

# ========== Team Member Schemas ==========

class TeamMemberCreate(BaseSchema):
    """Schema for team member creation"""
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    role: str = Field(..., min_length=1, max_length=100, description="Job role")
    initials: Optional[str] = Field(None, min_length=1, max_length=10, description="Avatar initials, derived from name when omitted")
    avatar_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN, description="Hex color, picked from the palette when omitted")

    @field_validator('name', 'role')
    @classmethod
    def strip_blank(cls, v):
        if not v.strip():
            raise ValueError('Must not be blank')
        return v.strip()

class TeamMemberUpdate(BaseSchema):
    """Schema for team member updates"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=100)
    initials: Optional[str] = Field(None, min_length=1, max_length=10)
    avatar_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)

    @field_validator('name', 'role')
    @classmethod
    def strip_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError('Must not be blank')
        return v.strip()

class TeamMemberResponse(BaseSchema):
    """Schema for team member response"""
    id: int
    name: str
    role: str
    initials: str
    avatar_color: str

# ========== Skill Schemas ==========

class SkillCreate(BaseSchema):
    """Schema for skill creation"""
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(default="question-line", min_length=1, max_length=50)
    icon_color: str = Field(default="#6366f1", pattern=HEX_COLOR_PATTERN)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Must not be blank')
        return v.strip()

class SkillUpdate(BaseSchema):
    """Schema for skill updates"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, min_length=1, max_length=50)
    icon_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError('Must not be blank')
        return v.strip()

class SkillResponse(BaseSchema):
    """Schema for skill response"""
    id: int
    name: str
    icon: str
    icon_color: str

class SkillLevelOption(BaseSchema):
    """Selectable skill level"""
    value: int
    label: str

# ========== Weekly Snapshot Schemas ==========

class WeeklySnapshotCreate(BaseSchema):
    """Schema for snapshot creation; the current flag is passed separately"""
    week_of: date = Field(..., description="Start date of the week")

class WeeklySnapshotUpdate(BaseSchema):
    """Schema for snapshot updates"""
    week_of: Optional[date] = None
    is_current_week: Optional[bool] = None

class WeeklySnapshotResponse(BaseSchema):
    """Schema for snapshot response"""
    id: int
    week_of: date
    is_current_week: bool

# ========== Skill Assessment Schemas ==========

class SkillAssessmentCreate(BaseSchema):
    """Schema for assessment creation (upsert on member, skill and snapshot)"""
    team_member_id: int = Field(..., description="Team member ID")
    skill_id: int = Field(..., description="Skill ID")
    snapshot_id: int = Field(..., description="Snapshot ID")
    level: SkillLevel = Field(default=SkillLevel.UNKNOWN, description="Skill level (0-3)")

class SkillAssessmentUpdate(BaseSchema):
    """Schema for assessment updates"""
    team_member_id: Optional[int] = None
    skill_id: Optional[int] = None
    snapshot_id: Optional[int] = None
    level: Optional[SkillLevel] = None

class SkillAssessmentResponse(BaseSchema):
    """Schema for assessment response"""
    id: int
    team_member_id: int
    skill_id: int
    snapshot_id: int
    level: int

# ========== Settings Schemas ==========

class SettingValue(BaseSchema):
    """Body of a settings write"""
    value: Any

class SettingResponse(BaseSchema):
    """Schema for setting response"""
    id: int
    key: str
    value: Any

# ========== Aggregation Schemas ==========

class SkillMatrixResponse(BaseSchema):
    """Current snapshot levels: member id -> skill id -> level"""
    members: List[TeamMemberResponse]
    skills: List[SkillResponse]
    assessments: Dict[str, Dict[str, int]]

class WeeklyComparisonResponse(BaseSchema):
    """Per-skill averages, positionally aligned with skills"""
    skills: List[SkillResponse]
    current_week: List[float]
    previous_week: List[float]

class GrowthPerSkillResponse(BaseSchema):
    """Per-skill averages for recent snapshots, oldest first"""
    snapshots: List[WeeklySnapshotResponse]
    skills: List[SkillResponse]
    data: Dict[int, List[float]]

class TeamStatsResponse(BaseSchema):
    """Headline team statistics"""
    team_size: int
    total_skills: int
    avg_skill_level: float
    growth_areas: int
    stagnant_areas: int
    avg_skill_level_change: float

class TopSkill(BaseSchema):
    """Skill ranked by current average; growth is a percentage"""
    id: int
    name: str
    icon: str
    icon_color: str
    average_level: float
    growth: float

# ========== Report Schemas ==========

class ReportSkill(BaseSchema):
    """Skill entry in a report; growth is an absolute level difference"""
    id: int
    name: str
    icon: str
    icon_color: str
    average_level: float
    previous_level: float
    growth: float

class ReportPeriod(BaseSchema):
    start: datetime
    end: datetime

class ReportResponse(BaseSchema):
    """Weekly or monthly team report"""
    report_type: str
    generated_at: datetime
    period: ReportPeriod
    snapshots_analyzed: int
    team_size: int
    total_skills: int
    avg_skill_level: float
    growth_areas: int
    stagnant_areas: int
    top_skills: List[ReportSkill]
    highest_growth: List[ReportSkill]
    no_progress: List[ReportSkill]

# ========== Error Schemas ==========

class ErrorDetail(BaseModel):
    """Field-level validation error"""
    loc: List[Any]
    msg: str
    type: str

class HTTPError(BaseModel):
    """Schema for HTTP errors"""
    error: bool
    code: int
    message: str
    details: Optional[List[ErrorDetail]] = None
    path: str
    timestamp: str

# ========== Health Check Schemas ==========

class HealthCheck(BaseModel):
    """Schema for health check response"""
    status: str
    service: str
    version: str
    timestamp: str
    database: str

# ========== Export all schemas ==========

__all__ = [
    # Team member
    "TeamMemberCreate", "TeamMemberUpdate", "TeamMemberResponse",

    # Skill
    "SkillCreate", "SkillUpdate", "SkillResponse", "SkillLevelOption",

    # Snapshot
    "WeeklySnapshotCreate", "WeeklySnapshotUpdate", "WeeklySnapshotResponse",

    # Assessment
    "SkillAssessmentCreate", "SkillAssessmentUpdate", "SkillAssessmentResponse",

    # Settings
    "SettingValue", "SettingResponse",

    # Aggregations
    "SkillMatrixResponse", "WeeklyComparisonResponse", "GrowthPerSkillResponse",
    "TeamStatsResponse", "TopSkill",

    # Report
    "ReportSkill", "ReportPeriod", "ReportResponse",

    # Error
    "ErrorDetail", "HTTPError",

    # Health
    "HealthCheck",

    # Base
    "BaseSchema",
]
