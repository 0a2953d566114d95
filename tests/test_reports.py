from skillpulse import crud, schemas
from skillpulse.config import settings
from skillpulse.services import ReportService


def test_report_without_current_snapshot_is_empty(db, team):
    report = ReportService(db).generate_weekly_report()

    assert report["report_type"] == "weekly"
    assert report["snapshots_analyzed"] == 0
    assert report["team_size"] == 3
    assert report["total_skills"] == 3
    assert report["avg_skill_level"] == 0.0
    assert report["top_skills"] == []
    assert report["highest_growth"] == []
    assert report["no_progress"] == []


def test_weekly_report_buckets(db, team, make_snapshot, assess):
    members, skills = team
    python, sql, docker = skills
    previous = make_snapshot(weeks_ago=1)
    current = make_snapshot(current=True)

    for member in members:
        # Python grows
        assess(member, python, previous, 1)
        assess(member, python, current, 2)
        # SQL stays
        assess(member, sql, previous, 2)
        assess(member, sql, current, 2)
        # Docker goes backwards
        assess(member, docker, previous, 3)
        assess(member, docker, current, 1)

    report = ReportService(db).generate_weekly_report()

    assert report["snapshots_analyzed"] == 2
    assert report["growth_areas"] == 1
    assert report["stagnant_areas"] == 1
    assert [s["name"] for s in report["highest_growth"]] == ["Python"]
    assert report["highest_growth"][0]["growth"] == 1.0
    assert report["highest_growth"][0]["previous_level"] == 1.0
    assert [s["name"] for s in report["no_progress"]] == ["SQL"]
    assert [s["name"] for s in report["top_skills"]] == ["Python", "SQL", "Docker"]
    assert (report["period"]["end"] - report["period"]["start"]).days == 7


def test_report_without_baseline_counts_everything_as_growth_or_stagnant(db, team, make_snapshot, assess):
    members, skills = team
    current = make_snapshot(current=True)
    assess(members[0], skills[0], current, 3)

    report = ReportService(db).generate_weekly_report()

    assert report["snapshots_analyzed"] == 1
    assert report["growth_areas"] == 1
    assert report["stagnant_areas"] == 2


def test_no_progress_lists_lowest_averages_first(db, make_snapshot, assess):
    member = crud.create_team_member(db, schemas.TeamMemberCreate(name="Ada Lovelace", role="Engineer"))
    previous = make_snapshot(weeks_ago=1)
    current = make_snapshot(current=True)

    for name, level in (("Go", 2), ("Rust", 0), ("Java", 1)):
        skill = crud.create_skill(db, schemas.SkillCreate(name=name))
        assess(member, skill, previous, level)
        assess(member, skill, current, level)

    report = ReportService(db).generate_weekly_report()

    assert [s["name"] for s in report["no_progress"]] == ["Rust", "Java", "Go"]


def test_report_limits(db, make_snapshot, assess, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_TOP_SKILLS_LIMIT", 3)
    monkeypatch.setattr(settings, "REPORT_HIGHLIGHT_LIMIT", 2)

    member = crud.create_team_member(db, schemas.TeamMemberCreate(name="Ada Lovelace", role="Engineer"))
    previous = make_snapshot(weeks_ago=1)
    current = make_snapshot(current=True)
    for i in range(5):
        skill = crud.create_skill(db, schemas.SkillCreate(name=f"Skill {i}"))
        assess(member, skill, previous, 1)
        assess(member, skill, current, 2)

    report = ReportService(db).generate_weekly_report()

    assert report["total_skills"] == 5
    assert report["growth_areas"] == 5
    assert len(report["top_skills"]) == 3
    assert len(report["highest_growth"]) == 2


def test_monthly_report_compares_against_oldest_in_window(db, team, make_snapshot, assess):
    members, skills = team
    # Six earlier weeks; only the four most recent fall in the window
    earlier = [make_snapshot(weeks_ago=w) for w in range(6, 0, -1)]
    current = make_snapshot(current=True)

    baseline = earlier[2]  # four weeks ago
    assert (current.week_of - baseline.week_of).days == 28

    for member in members:
        assess(member, skills[0], earlier[0], 3)
        assess(member, skills[0], baseline, 1)
        assess(member, skills[0], current, 2)

    report = ReportService(db).generate_monthly_report()

    assert report["report_type"] == "monthly"
    assert report["snapshots_analyzed"] == settings.MONTHLY_REPORT_SNAPSHOTS
    python = next(s for s in report["top_skills"] if s["id"] == skills[0].id)
    assert python["previous_level"] == 1.0
    assert python["growth"] == 1.0
    assert (report["period"]["end"] - report["period"]["start"]).days == 30


def test_monthly_report_with_few_snapshots(db, team, make_snapshot, assess):
    members, skills = team
    previous = make_snapshot(weeks_ago=1)
    current = make_snapshot(current=True)
    assess(members[0], skills[0], previous, 3)
    assess(members[0], skills[0], current, 3)

    report = ReportService(db).generate_monthly_report()

    assert report["snapshots_analyzed"] == 2
    assert report["stagnant_areas"] == 3
