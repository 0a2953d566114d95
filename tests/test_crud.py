from datetime import date

import pytest

from skillpulse import crud, schemas
from skillpulse.exceptions import ValidationError


def test_create_team_member_generates_initials_and_color(db):
    member = crud.create_team_member(db, schemas.TeamMemberCreate(name="Ada Lovelace", role="Engineer"))

    assert member.initials == "AL"
    assert member.avatar_color.startswith("#")


def test_explicit_initials_are_kept(db):
    member = crud.create_team_member(
        db, schemas.TeamMemberCreate(name="Ada Lovelace", role="Engineer", initials="AD")
    )
    assert member.initials == "AD"


def test_renaming_member_regenerates_initials(db):
    member = crud.create_team_member(db, schemas.TeamMemberCreate(name="Ada Lovelace", role="Engineer"))

    updated = crud.update_team_member(db, member.id, {"name": "Grace Hopper"})

    assert updated.initials == "GH"


def test_update_missing_member_returns_none(db):
    assert crud.update_team_member(db, 999, {"name": "Nobody"}) is None
    assert crud.delete_team_member(db, 999) is False


def test_skill_names_are_unique_ignoring_case(db):
    crud.create_skill(db, schemas.SkillCreate(name="Python"))

    with pytest.raises(ValidationError) as exc_info:
        crud.create_skill(db, schemas.SkillCreate(name="python"))

    assert exc_info.value.field == "name"


def test_renaming_skill_onto_existing_name_fails(db):
    crud.create_skill(db, schemas.SkillCreate(name="Python"))
    sql = crud.create_skill(db, schemas.SkillCreate(name="SQL"))

    with pytest.raises(ValidationError):
        crud.update_skill(db, sql.id, {"name": "Python"})


def test_set_current_unflags_previous_current(db, make_snapshot):
    first = make_snapshot(weeks_ago=1, current=True)
    second = make_snapshot(weeks_ago=0, current=True)

    snapshots = crud.get_snapshots(db)
    assert [s.id for s in snapshots if s.is_current_week] == [second.id]
    assert crud.get_current_snapshot(db).id == second.id
    assert crud.get_snapshot(db, first.id).is_current_week is False


def test_update_snapshot_to_current_keeps_single_current(db, make_snapshot):
    old = make_snapshot(weeks_ago=1)
    make_snapshot(weeks_ago=0, current=True)

    crud.update_snapshot(db, old.id, {"is_current_week": True})

    current = [s for s in crud.get_snapshots(db) if s.is_current_week]
    assert [s.id for s in current] == [old.id]


def test_current_snapshot_cannot_be_unflagged(db, make_snapshot):
    current = make_snapshot(weeks_ago=0, current=True)

    with pytest.raises(ValidationError) as exc_info:
        crud.update_snapshot(db, current.id, {"is_current_week": False})

    assert exc_info.value.field == "isCurrentWeek"
    assert crud.get_current_snapshot(db).id == current.id


def test_unflagging_non_current_snapshot_is_allowed(db, make_snapshot):
    old = make_snapshot(weeks_ago=1)
    current = make_snapshot(weeks_ago=0, current=True)

    updated = crud.update_snapshot(db, old.id, {"is_current_week": False})

    assert updated.is_current_week is False
    assert crud.get_current_snapshot(db).id == current.id


def test_previous_snapshot_is_latest_earlier_week(db, make_snapshot):
    make_snapshot(weeks_ago=3)
    expected = make_snapshot(weeks_ago=1)
    make_snapshot(weeks_ago=2)
    make_snapshot(weeks_ago=0, current=True)

    assert crud.get_previous_snapshot(db).id == expected.id


def test_no_previous_without_current(db, make_snapshot):
    make_snapshot(weeks_ago=1)
    assert crud.get_current_snapshot(db) is None
    assert crud.get_previous_snapshot(db) is None


def test_snapshots_listed_newest_first(db, make_snapshot):
    make_snapshot(weeks_ago=2)
    make_snapshot(weeks_ago=0)
    make_snapshot(weeks_ago=1)

    weeks = [s.week_of for s in crud.get_snapshots(db)]
    assert weeks == sorted(weeks, reverse=True)


def test_assessment_upsert_updates_existing_row(db, team, make_snapshot, assess):
    members, skills = team
    snapshot = make_snapshot(current=True)

    first = assess(members[0], skills[0], snapshot, 1)
    second = assess(members[0], skills[0], snapshot, 3)

    assert first.id == second.id
    rows = crud.get_skill_assessments(db, snapshot_id=snapshot.id)
    assert len(rows) == 1
    assert rows[0].level == 3


def test_assessment_rejects_unknown_references(db, team, make_snapshot):
    members, skills = team
    snapshot = make_snapshot(current=True)

    with pytest.raises(ValidationError) as exc_info:
        crud.create_skill_assessment(db, schemas.SkillAssessmentCreate(
            team_member_id=999, skill_id=skills[0].id, snapshot_id=snapshot.id, level=1
        ))
    assert exc_info.value.field == "teamMemberId"

    with pytest.raises(ValidationError) as exc_info:
        crud.create_skill_assessment(db, schemas.SkillAssessmentCreate(
            team_member_id=members[0].id, skill_id=skills[0].id, snapshot_id=999, level=1
        ))
    assert exc_info.value.field == "snapshotId"


def test_update_assessment_cannot_collide_with_another(db, team, make_snapshot, assess):
    members, skills = team
    snapshot = make_snapshot(current=True)
    assess(members[0], skills[0], snapshot, 1)
    other = assess(members[0], skills[1], snapshot, 2)

    with pytest.raises(ValidationError):
        crud.update_skill_assessment(db, other.id, {"skill_id": skills[0].id})


def test_filter_assessments(db, team, make_snapshot, assess):
    members, skills = team
    snapshot = make_snapshot(current=True)
    assess(members[0], skills[0], snapshot, 1)
    assess(members[1], skills[0], snapshot, 2)
    assess(members[1], skills[1], snapshot, 3)

    assert len(crud.get_skill_assessments(db, team_member_id=members[1].id)) == 2
    assert len(crud.get_skill_assessments(db, skill_id=skills[0].id)) == 2
    assert len(crud.get_assessments_by_team_member(db, members[0].id)) == 1


@pytest.mark.parametrize("target", ["member", "skill", "snapshot"])
def test_delete_cascades_to_assessments(db, team, make_snapshot, assess, target):
    members, skills = team
    snapshot = make_snapshot(current=True)
    assess(members[0], skills[0], snapshot, 2)
    assess(members[1], skills[1], snapshot, 2)

    if target == "member":
        crud.delete_team_member(db, members[0].id)
        remaining = 1
    elif target == "skill":
        crud.delete_skill(db, skills[1].id)
        remaining = 1
    else:
        crud.delete_snapshot(db, snapshot.id)
        remaining = 0

    assert len(crud.get_skill_assessments(db)) == remaining


def test_settings_round_trip(db):
    assert crud.get_setting(db, "theme") is None

    crud.set_setting(db, "theme", {"dark": True})
    crud.set_setting(db, "theme", {"dark": False, "accent": "#10b981"})

    setting = crud.get_setting(db, "theme")
    assert setting.value == {"dark": False, "accent": "#10b981"}


def test_snapshot_week_of_is_stored(db):
    snapshot = crud.create_snapshot(db, schemas.WeeklySnapshotCreate(week_of=date(2024, 1, 1)))
    assert crud.get_snapshot(db, snapshot.id).week_of == date(2024, 1, 1)
    assert snapshot.is_current_week is False
