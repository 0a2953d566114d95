from datetime import date

import pytest
from pydantic import ValidationError

from skillpulse.models import SkillLevel, get_skill_level_name
from skillpulse.schemas import (
    SkillAssessmentCreate, TeamMemberCreate, TeamMemberUpdate, SkillUpdate,
    WeeklySnapshotCreate, TeamMemberResponse
)


@pytest.mark.parametrize("level", [-1, 4, 10])
def test_assessment_level_out_of_range(level):
    with pytest.raises(ValidationError):
        SkillAssessmentCreate(team_member_id=1, skill_id=1, snapshot_id=1, level=level)


def test_assessment_accepts_camel_case():
    assessment = SkillAssessmentCreate.model_validate(
        {"teamMemberId": 1, "skillId": 2, "snapshotId": 3, "level": 2}
    )
    assert assessment.team_member_id == 1
    assert assessment.level == SkillLevel.HANDS_ON_EXPERIENCE


def test_assessment_level_defaults_to_unknown():
    assessment = SkillAssessmentCreate(team_member_id=1, skill_id=1, snapshot_id=1)
    assert assessment.level == SkillLevel.UNKNOWN


def test_member_name_is_stripped():
    member = TeamMemberCreate(name="  Ada Lovelace ", role="Engineer")
    assert member.name == "Ada Lovelace"


def test_member_rejects_blank_role_and_bad_color():
    with pytest.raises(ValidationError):
        TeamMemberCreate(name="Ada", role="   ")
    with pytest.raises(ValidationError):
        TeamMemberCreate(name="Ada", role="Engineer", avatar_color="blue")


def test_updates_strip_and_reject_blank_names():
    assert TeamMemberUpdate(name=" Ada ").name == "Ada"
    assert SkillUpdate(name="python ").name == "python"
    assert TeamMemberUpdate(role="Lead").name is None

    with pytest.raises(ValidationError):
        TeamMemberUpdate(name="   ")
    with pytest.raises(ValidationError):
        TeamMemberUpdate(role="  ")
    with pytest.raises(ValidationError):
        SkillUpdate(name=" ")


def test_snapshot_parses_iso_date():
    snapshot = WeeklySnapshotCreate.model_validate({"weekOf": "2024-06-03"})
    assert snapshot.week_of == date(2024, 6, 3)


def test_response_dumps_camel_case():
    member = TeamMemberResponse(id=1, name="Ada", role="Engineer", initials="AD", avatar_color="#4f46e5")
    assert member.model_dump(by_alias=True)["avatarColor"] == "#4f46e5"


def test_level_names():
    assert get_skill_level_name(0) == "Unknown"
    assert get_skill_level_name(2) == "Hands-on Experience"
    assert get_skill_level_name(7) == "Unknown"
