import csv
from datetime import date
import io

import pytest
from openpyxl import load_workbook

from skillpulse import crud
from skillpulse.services import AggregationService
from skillpulse.utils import (
    generate_avatar_initials, round_level, average_level, mean_level,
    absolute_growth, percentage_growth
)
from skillpulse.utils.export import export_skill_matrix_csv, export_skill_matrix_excel
from skillpulse.utils.seed_data import seed_database

TODAY = date(2024, 6, 3)


@pytest.mark.parametrize("name, expected", [
    ("Ada Lovelace", "AL"),
    ("Grace Brewster Hopper", "GH"),
    ("cher", "CH"),
    ("X", "X?"),
    ("  ", "??"),
])
def test_generate_avatar_initials(name, expected):
    assert generate_avatar_initials(name) == expected


def test_round_level_rounds_half_up():
    # Exact binary halves round away from zero
    assert round_level(1.25) == 1.3
    assert round_level(-0.25) == -0.3
    assert round_level(1.333) == 1.3


def test_round_level_uses_binary_value():
    # 2.05, 0.15 and 1.45 are stored just below the half
    assert round_level(2.05) == 2.0
    assert average_level([3], 20) == 0.1
    assert average_level([29], 20) == 1.4


def test_average_level_uses_denominator():
    assert average_level([2, 2], 3) == 1.3
    assert average_level([], 3) == 0.0
    assert average_level([1], 0) == 0.0
    assert mean_level([1, 2]) == 1.5


def test_growth_helpers():
    assert absolute_growth(2.0, 1.5) == 0.5
    assert absolute_growth(1.0, None) == 1.0
    assert percentage_growth(1.5, 1.0) == 50.0
    assert percentage_growth(2.0, 0.0) == 0.0


def test_csv_export(db, team, make_snapshot, assess):
    members, skills = team
    current = make_snapshot(current=True)
    assess(members[0], skills[0], current, 3)

    matrix = AggregationService(db).get_skill_matrix()
    rows = list(csv.reader(io.StringIO(export_skill_matrix_csv(matrix).getvalue().decode("utf-8"))))

    assert rows[0] == ["Team Member", "Role", "Python", "SQL", "Docker"]
    assert rows[1] == ["Ada Lovelace", "Developer", "Expert", "Unknown", "Unknown"]
    assert len(rows) == 4


def test_excel_export(db, team, make_snapshot, assess):
    members, skills = team
    current = make_snapshot(current=True)
    assess(members[1], skills[1], current, 1)

    matrix = AggregationService(db).get_skill_matrix()
    workbook = load_workbook(export_skill_matrix_excel(matrix))
    sheet = workbook["Skill Matrix"]

    assert [cell.value for cell in sheet[1]] == ["Team Member", "Role", "Python", "SQL", "Docker"]
    assert [cell.value for cell in sheet[3]] == ["Alan Turing", "Developer", "Unknown", "Basic Knowledge", "Unknown"]


def test_seed_database_once(db):
    assert seed_database(db, today=TODAY) is True
    assert seed_database(db, today=TODAY) is False

    assert crud.count_team_members(db) == 3
    assert crud.count_skills(db) == 7
    assert crud.get_current_snapshot(db).week_of == TODAY
    assert len(crud.get_skill_assessments(db)) == 2 * 3 * 7


def test_seeded_dashboard(db):
    seed_database(db, today=TODAY)

    stats = AggregationService(db).get_team_stats()

    assert stats["team_size"] == 3
    assert stats["growth_areas"] > 0
