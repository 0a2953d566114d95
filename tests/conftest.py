import os

# Must be set before skillpulse.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DATABASE"] = "false"
os.environ["ENVIRONMENT"] = "testing"

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from skillpulse import crud, schemas
from skillpulse.database import SessionLocal, init_db, drop_db
from skillpulse.main import app

TODAY = date(2024, 6, 3)


@pytest.fixture
def db():
    drop_db()
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def team(db):
    """Three members and three skills, no snapshots"""
    members = [
        crud.create_team_member(db, schemas.TeamMemberCreate(name=name, role="Developer"))
        for name in ("Ada Lovelace", "Alan Turing", "Grace Hopper")
    ]
    skills = [
        crud.create_skill(db, schemas.SkillCreate(name=name))
        for name in ("Python", "SQL", "Docker")
    ]
    return members, skills


@pytest.fixture
def make_snapshot(db):
    def _make(weeks_ago=0, current=False):
        return crud.create_snapshot(
            db,
            schemas.WeeklySnapshotCreate(week_of=TODAY - timedelta(weeks=weeks_ago)),
            set_current=current,
        )
    return _make


@pytest.fixture
def assess(db):
    def _assess(member, skill, snapshot, level):
        return crud.create_skill_assessment(db, schemas.SkillAssessmentCreate(
            team_member_id=member.id,
            skill_id=skill.id,
            snapshot_id=snapshot.id,
            level=level,
        ))
    return _assess
