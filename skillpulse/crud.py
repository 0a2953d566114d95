"""
CRUD operations for SkillPulse application
"""
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func, desc
import logging

from skillpulse import models, schemas
from skillpulse.exceptions import ValidationError
from skillpulse.utils import generate_avatar_initials, random_avatar_color

logger = logging.getLogger(__name__)

# ========== Team Member CRUD Operations ==========

def get_team_member(db: Session, member_id: int) -> Optional[models.TeamMember]:
    """Get team member by ID"""
    return db.query(models.TeamMember).filter(models.TeamMember.id == member_id).first()

def get_team_members(db: Session) -> List[models.TeamMember]:
    """Get all team members"""
    return db.query(models.TeamMember).order_by(models.TeamMember.id).all()

def count_team_members(db: Session) -> int:
    return db.query(func.count(models.TeamMember.id)).scalar() or 0

def create_team_member(db: Session, member_data: schemas.TeamMemberCreate) -> models.TeamMember:
    """Create new team member"""
    data = member_data.model_dump()
    if not data.get("initials"):
        data["initials"] = generate_avatar_initials(data["name"])
    if not data.get("avatar_color"):
        data["avatar_color"] = random_avatar_color()

    db_member = models.TeamMember(**data)
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    logger.info(f"Created team member {db_member.id} ({db_member.name})")
    return db_member

def update_team_member(
    db: Session,
    member_id: int,
    update_data: Dict[str, Any]
) -> Optional[models.TeamMember]:
    """Update team member"""
    db_member = get_team_member(db, member_id)
    if not db_member:
        return None

    # If name changed, update initials unless they were given explicitly
    if 'name' in update_data and update_data['name'] != db_member.name and 'initials' not in update_data:
        update_data['initials'] = generate_avatar_initials(update_data['name'])

    for field, value in update_data.items():
        setattr(db_member, field, value)

    db.commit()
    db.refresh(db_member)
    logger.info(f"Updated team member {member_id}: {sorted(update_data)}")
    return db_member

def delete_team_member(db: Session, member_id: int) -> bool:
    """Delete team member together with all of their assessments"""
    db_member = get_team_member(db, member_id)
    if not db_member:
        return False

    db.delete(db_member)
    db.commit()
    logger.info(f"Deleted team member {member_id}")
    return True

# ========== Skill CRUD Operations ==========

def get_skill(db: Session, skill_id: int) -> Optional[models.Skill]:
    """Get skill by ID"""
    return db.query(models.Skill).filter(models.Skill.id == skill_id).first()

def get_skill_by_name(db: Session, name: str) -> Optional[models.Skill]:
    """Get skill by name, ignoring case"""
    return db.query(models.Skill).filter(
        func.lower(models.Skill.name) == func.lower(name)
    ).first()

def get_skills(db: Session) -> List[models.Skill]:
    """Get all skills"""
    return db.query(models.Skill).order_by(models.Skill.id).all()

def count_skills(db: Session) -> int:
    return db.query(func.count(models.Skill.id)).scalar() or 0

def create_skill(db: Session, skill_data: schemas.SkillCreate) -> models.Skill:
    """Create new skill"""
    if get_skill_by_name(db, skill_data.name):
        raise ValidationError("Skill with this name already exists", field="name")

    db_skill = models.Skill(**skill_data.model_dump())
    db.add(db_skill)
    db.commit()
    db.refresh(db_skill)
    logger.info(f"Created skill {db_skill.id} ({db_skill.name})")
    return db_skill

def update_skill(
    db: Session,
    skill_id: int,
    update_data: Dict[str, Any]
) -> Optional[models.Skill]:
    """Update skill"""
    db_skill = get_skill(db, skill_id)
    if not db_skill:
        return None

    # Check if new name conflicts with existing
    if 'name' in update_data and update_data['name'] != db_skill.name:
        existing = get_skill_by_name(db, update_data['name'])
        if existing and existing.id != skill_id:
            raise ValidationError("Skill with this name already exists", field="name")

    for field, value in update_data.items():
        setattr(db_skill, field, value)

    db.commit()
    db.refresh(db_skill)
    logger.info(f"Updated skill {skill_id}: {sorted(update_data)}")
    return db_skill

def delete_skill(db: Session, skill_id: int) -> bool:
    """Delete skill together with all of its assessments"""
    db_skill = get_skill(db, skill_id)
    if not db_skill:
        return False

    db.delete(db_skill)
    db.commit()
    logger.info(f"Deleted skill {skill_id}")
    return True

# ========== Weekly Snapshot CRUD Operations ==========

def get_snapshot(db: Session, snapshot_id: int) -> Optional[models.WeeklySnapshot]:
    """Get snapshot by ID"""
    return db.query(models.WeeklySnapshot).filter(models.WeeklySnapshot.id == snapshot_id).first()

def get_snapshots(db: Session, limit: Optional[int] = None) -> List[models.WeeklySnapshot]:
    """Get snapshots, newest week first"""
    query = db.query(models.WeeklySnapshot).order_by(
        desc(models.WeeklySnapshot.week_of),
        desc(models.WeeklySnapshot.id)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def get_current_snapshot(db: Session) -> Optional[models.WeeklySnapshot]:
    """Get the snapshot flagged as the current week"""
    return db.query(models.WeeklySnapshot).filter(
        models.WeeklySnapshot.is_current_week.is_(True)
    ).first()

def get_previous_snapshot(db: Session) -> Optional[models.WeeklySnapshot]:
    """Get the latest snapshot whose week is strictly before the current one"""
    current = get_current_snapshot(db)
    if not current:
        return None

    return db.query(models.WeeklySnapshot).filter(
        models.WeeklySnapshot.week_of < current.week_of
    ).order_by(
        desc(models.WeeklySnapshot.week_of),
        desc(models.WeeklySnapshot.id)
    ).first()

def get_non_current_snapshots(db: Session, limit: Optional[int] = None) -> List[models.WeeklySnapshot]:
    """Get snapshots not flagged current, newest week first"""
    query = db.query(models.WeeklySnapshot).filter(
        models.WeeklySnapshot.is_current_week.is_(False)
    ).order_by(
        desc(models.WeeklySnapshot.week_of),
        desc(models.WeeklySnapshot.id)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def _clear_current_flag(db: Session, exclude_id: Optional[int] = None) -> None:
    """Unflag the current snapshot; caller commits"""
    query = db.query(models.WeeklySnapshot).filter(
        models.WeeklySnapshot.is_current_week.is_(True)
    )
    if exclude_id is not None:
        query = query.filter(models.WeeklySnapshot.id != exclude_id)
    query.update({models.WeeklySnapshot.is_current_week: False}, synchronize_session="fetch")

def create_snapshot(
    db: Session,
    snapshot_data: schemas.WeeklySnapshotCreate,
    set_current: bool = False
) -> models.WeeklySnapshot:
    """
    Create new snapshot

    When set_current is true the old current flag is cleared and the new
    snapshot inserted in the same transaction, so readers never see two
    current snapshots.
    """
    try:
        if set_current:
            _clear_current_flag(db)

        db_snapshot = models.WeeklySnapshot(
            week_of=snapshot_data.week_of,
            is_current_week=set_current
        )
        db.add(db_snapshot)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_snapshot)
    logger.info(f"Created snapshot {db_snapshot.id} for week of {db_snapshot.week_of} (current={set_current})")
    return db_snapshot

def update_snapshot(
    db: Session,
    snapshot_id: int,
    update_data: Dict[str, Any]
) -> Optional[models.WeeklySnapshot]:
    """Update snapshot; flagging it current unflags every other snapshot"""
    db_snapshot = get_snapshot(db, snapshot_id)
    if not db_snapshot:
        return None

    # The current flag moves by flagging another snapshot, never by clearing it
    if update_data.get('is_current_week') is False and db_snapshot.is_current_week:
        raise ValidationError(
            "The current snapshot cannot be unflagged; mark another snapshot as current instead",
            field="isCurrentWeek"
        )

    try:
        if update_data.get('is_current_week'):
            _clear_current_flag(db, exclude_id=snapshot_id)

        for field, value in update_data.items():
            setattr(db_snapshot, field, value)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_snapshot)
    logger.info(f"Updated snapshot {snapshot_id}: {sorted(update_data)}")
    return db_snapshot

def delete_snapshot(db: Session, snapshot_id: int) -> bool:
    """Delete snapshot together with all of its assessments"""
    db_snapshot = get_snapshot(db, snapshot_id)
    if not db_snapshot:
        return False

    db.delete(db_snapshot)
    db.commit()
    logger.info(f"Deleted snapshot {snapshot_id}")
    return True

# ========== Skill Assessment CRUD Operations ==========

def get_skill_assessment(
    db: Session,
    assessment_id: int
) -> Optional[models.SkillAssessment]:
    """Get skill assessment by ID"""
    return db.query(models.SkillAssessment).filter(
        models.SkillAssessment.id == assessment_id
    ).first()

def get_skill_assessments(
    db: Session,
    snapshot_id: Optional[int] = None,
    team_member_id: Optional[int] = None,
    skill_id: Optional[int] = None
) -> List[models.SkillAssessment]:
    """Get skill assessments with filtering"""
    query = db.query(models.SkillAssessment)

    if snapshot_id is not None:
        query = query.filter(models.SkillAssessment.snapshot_id == snapshot_id)

    if team_member_id is not None:
        query = query.filter(models.SkillAssessment.team_member_id == team_member_id)

    if skill_id is not None:
        query = query.filter(models.SkillAssessment.skill_id == skill_id)

    return query.order_by(models.SkillAssessment.id).all()

def get_assessments_by_snapshot(db: Session, snapshot_id: int) -> List[models.SkillAssessment]:
    return get_skill_assessments(db, snapshot_id=snapshot_id)

def get_assessments_by_team_member(db: Session, team_member_id: int) -> List[models.SkillAssessment]:
    return get_skill_assessments(db, team_member_id=team_member_id)

def _find_assessment(
    db: Session,
    team_member_id: int,
    skill_id: int,
    snapshot_id: int
) -> Optional[models.SkillAssessment]:
    return db.query(models.SkillAssessment).filter(
        models.SkillAssessment.team_member_id == team_member_id,
        models.SkillAssessment.skill_id == skill_id,
        models.SkillAssessment.snapshot_id == snapshot_id
    ).first()

def _check_assessment_references(db: Session, data: Dict[str, Any]) -> None:
    """Reject references to members, skills or snapshots that do not exist"""
    if 'team_member_id' in data and not get_team_member(db, data['team_member_id']):
        raise ValidationError("Team member does not exist", field="teamMemberId")
    if 'skill_id' in data and not get_skill(db, data['skill_id']):
        raise ValidationError("Skill does not exist", field="skillId")
    if 'snapshot_id' in data and not get_snapshot(db, data['snapshot_id']):
        raise ValidationError("Snapshot does not exist", field="snapshotId")

def create_skill_assessment(
    db: Session,
    assessment_data: schemas.SkillAssessmentCreate
) -> models.SkillAssessment:
    """
    Create a skill assessment, or update the level of the existing one for
    the same member, skill and snapshot
    """
    data = assessment_data.model_dump()
    _check_assessment_references(db, data)

    existing = _find_assessment(db, data['team_member_id'], data['skill_id'], data['snapshot_id'])
    if existing:
        existing.level = data['level']
        db.commit()
        db.refresh(existing)
        logger.info(f"Updated assessment {existing.id} to level {existing.level}")
        return existing

    db_assessment = models.SkillAssessment(**data)
    db.add(db_assessment)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent insert of the same triple
        db.rollback()
        existing = _find_assessment(db, data['team_member_id'], data['skill_id'], data['snapshot_id'])
        if not existing:
            raise
        existing.level = data['level']
        db.commit()
        db.refresh(existing)
        logger.info(f"Updated assessment {existing.id} to level {existing.level}")
        return existing

    db.refresh(db_assessment)
    logger.info(f"Created assessment {db_assessment.id}")
    return db_assessment

def update_skill_assessment(
    db: Session,
    assessment_id: int,
    update_data: Dict[str, Any]
) -> Optional[models.SkillAssessment]:
    """Update skill assessment"""
    db_assessment = get_skill_assessment(db, assessment_id)
    if not db_assessment:
        return None

    _check_assessment_references(db, update_data)

    # Moving onto another member/skill/snapshot must not create a duplicate
    target = (
        update_data.get('team_member_id', db_assessment.team_member_id),
        update_data.get('skill_id', db_assessment.skill_id),
        update_data.get('snapshot_id', db_assessment.snapshot_id),
    )
    clash = _find_assessment(db, *target)
    if clash and clash.id != assessment_id:
        raise ValidationError(
            "An assessment already exists for this team member, skill and snapshot",
            field="snapshotId"
        )

    for field, value in update_data.items():
        setattr(db_assessment, field, value)

    db.commit()
    db.refresh(db_assessment)
    logger.info(f"Updated assessment {assessment_id}: {sorted(update_data)}")
    return db_assessment

def delete_skill_assessment(db: Session, assessment_id: int) -> bool:
    """Delete skill assessment"""
    db_assessment = get_skill_assessment(db, assessment_id)
    if not db_assessment:
        return False

    db.delete(db_assessment)
    db.commit()
    logger.info(f"Deleted assessment {assessment_id}")
    return True

# ========== Settings Operations ==========

def get_setting(db: Session, key: str) -> Optional[models.Setting]:
    """Get setting by key"""
    return db.query(models.Setting).filter(models.Setting.key == key).first()

def set_setting(db: Session, key: str, value: Any) -> models.Setting:
    """Insert or replace a setting value"""
    db_setting = get_setting(db, key)

    if db_setting:
        db_setting.value = value
    else:
        db_setting = models.Setting(key=key, value=value)
        db.add(db_setting)

    db.commit()
    db.refresh(db_setting)
    logger.info(f"Setting '{key}' saved")
    return db_setting
