"""
SQLAlchemy database models for SkillPulse application
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, ForeignKey, JSON
)
from sqlalchemy.orm import relationship, validates
from sqlalchemy import UniqueConstraint
import enum

from skillpulse.database import Base

# Enums
class SkillLevel(enum.IntEnum):
    """Proficiency levels, ordered from none to expert"""
    UNKNOWN = 0
    BASIC_KNOWLEDGE = 1
    HANDS_ON_EXPERIENCE = 2
    EXPERT = 3

    @property
    def label(self) -> str:
        return SKILL_LEVEL_LABELS[self]

SKILL_LEVEL_LABELS = {
    SkillLevel.UNKNOWN: "Unknown",
    SkillLevel.BASIC_KNOWLEDGE: "Basic Knowledge",
    SkillLevel.HANDS_ON_EXPERIENCE: "Hands-on Experience",
    SkillLevel.EXPERT: "Expert",
}

def get_skill_level_name(level: int) -> str:
    """Human readable name for a level, 'Unknown' for anything out of range"""
    try:
        return SkillLevel(level).label
    except ValueError:
        return SkillLevel.UNKNOWN.label

class TeamMember(Base):
    """Team member whose skills are tracked"""
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    role = Column(String(100), nullable=False)
    initials = Column(String(10), nullable=False)
    avatar_color = Column(String(7), nullable=False, default="#6366f1")  # Hex color for UI

    # Relationships
    assessments = relationship("SkillAssessment", back_populates="team_member", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<TeamMember(id={self.id}, name='{self.name}')>"

class Skill(Base):
    """Skill model (e.g., JavaScript, Python, Communication)"""
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    icon = Column(String(50), nullable=False, default="question-line")  # Remix icon name
    icon_color = Column(String(7), nullable=False, default="#6366f1")  # Hex color

    # Relationships
    assessments = relationship("SkillAssessment", back_populates="skill", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Skill(id={self.id}, name='{self.name}')>"

class WeeklySnapshot(Base):
    """Point-in-time grouping of assessments, one per week"""
    __tablename__ = "weekly_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    week_of = Column(Date, nullable=False, index=True)  # Start date of the week
    is_current_week = Column(Boolean, default=False, nullable=False)

    # Relationships
    assessments = relationship("SkillAssessment", back_populates="snapshot", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<WeeklySnapshot(id={self.id}, week_of='{self.week_of}', current={self.is_current_week})>"

class SkillAssessment(Base):
    """Level of one team member in one skill for one snapshot"""
    __tablename__ = "skill_assessments"

    id = Column(Integer, primary_key=True, index=True)
    team_member_id = Column(Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    snapshot_id = Column(Integer, ForeignKey("weekly_snapshots.id", ondelete="CASCADE"), nullable=False, index=True)
    level = Column(Integer, nullable=False, default=SkillLevel.UNKNOWN.value)

    # Relationships
    team_member = relationship("TeamMember", back_populates="assessments")
    skill = relationship("Skill", back_populates="assessments")
    snapshot = relationship("WeeklySnapshot", back_populates="assessments")

    __table_args__ = (
        UniqueConstraint('team_member_id', 'skill_id', 'snapshot_id', name='unique_member_skill_snapshot'),
    )

    # Validators
    @validates('level')
    def validate_level(self, key, level):
        if level is None or level not in SKILL_LEVEL_LABELS:
            raise ValueError("Level must be one of 0, 1, 2, 3")
        return int(level)

    def __repr__(self):
        return f"<SkillAssessment(id={self.id}, member={self.team_member_id}, skill={self.skill_id}, snapshot={self.snapshot_id}, level={self.level})>"

class Setting(Base):
    """Application key-value settings"""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(JSON, nullable=False)

    def __repr__(self):
        return f"<Setting(id={self.id}, key='{self.key}')>"

# Export all models
__all__ = [
    "TeamMember",
    "Skill",
    "WeeklySnapshot",
    "SkillAssessment",
    "Setting",
    "SkillLevel",
    "SKILL_LEVEL_LABELS",
    "get_skill_level_name",
]
