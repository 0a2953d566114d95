"""
Demo data for an empty database
"""
from datetime import date, timedelta
import logging

from sqlalchemy.orm import Session

from skillpulse import crud, schemas
from skillpulse.models import SkillLevel

logger = logging.getLogger(__name__)

TEAM_MEMBERS = [
    ("John Doe", "Frontend Developer", "#4f46e5"),    # Indigo
    ("Jane Smith", "Backend Developer", "#06b6d4"),   # Cyan
    ("Bob Johnson", "Product Manager", "#ec4899"),    # Pink
]

SKILLS = [
    ("JavaScript", "code-s-slash-line", "#f59e0b"),   # Amber
    ("TypeScript", "code-s-slash-line", "#3b82f6"),   # Blue
    ("React", "reactjs-line", "#06b6d4"),             # Cyan
    ("Node.js", "nodejs-line", "#10b981"),            # Emerald
    ("Python", "python-line", "#6366f1"),             # Indigo
    ("SQL", "database-2-line", "#8b5cf6"),            # Violet
    ("Communication", "discuss-line", "#ec4899"),     # Pink
]

U, B, H, E = (
    SkillLevel.UNKNOWN,
    SkillLevel.BASIC_KNOWLEDGE,
    SkillLevel.HANDS_ON_EXPERIENCE,
    SkillLevel.EXPERT,
)

# Levels per member, in SKILLS order
PREVIOUS_LEVELS = {
    "John Doe":    [E, H, E, B, U, B, H],
    "Jane Smith":  [H, H, B, E, E, E, H],
    "Bob Johnson": [B, U, B, U, B, B, E],
}

CURRENT_LEVELS = {
    "John Doe":    [E, E, E, H, B, B, H],
    "Jane Smith":  [H, H, H, E, E, E, E],
    "Bob Johnson": [H, B, H, B, B, H, E],
}


def seed_database(db: Session, today: date = None) -> bool:
    """
    Fill an empty database with a demo team, skills and two weekly snapshots

    Returns:
        True if data was created, False if the database already had members
    """
    if crud.count_team_members(db) > 0:
        logger.info("Database already contains team members, skipping demo data")
        return False

    today = today or date.today()
    logger.info("Seeding database with demo data")

    members = {}
    for name, role, color in TEAM_MEMBERS:
        members[name] = crud.create_team_member(
            db, schemas.TeamMemberCreate(name=name, role=role, avatar_color=color)
        )

    skills = []
    for name, icon, color in SKILLS:
        existing = crud.get_skill_by_name(db, name)
        skills.append(existing or crud.create_skill(
            db, schemas.SkillCreate(name=name, icon=icon, icon_color=color)
        ))

    previous = crud.create_snapshot(
        db, schemas.WeeklySnapshotCreate(week_of=today - timedelta(days=7)), set_current=False
    )
    current = crud.create_snapshot(
        db, schemas.WeeklySnapshotCreate(week_of=today), set_current=True
    )

    for snapshot, levels_by_member in ((previous, PREVIOUS_LEVELS), (current, CURRENT_LEVELS)):
        for member_name, levels in levels_by_member.items():
            for skill, level in zip(skills, levels):
                crud.create_skill_assessment(db, schemas.SkillAssessmentCreate(
                    team_member_id=members[member_name].id,
                    skill_id=skill.id,
                    snapshot_id=snapshot.id,
                    level=level,
                ))

    logger.info(
        f"Demo data created: {len(members)} members, {len(skills)} skills, 2 snapshots"
    )
    return True
