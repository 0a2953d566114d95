import csv
import io
from typing import Any, Dict, List

import pandas as pd

from skillpulse.models import get_skill_level_name


def skill_matrix_rows(matrix: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Flatten a skill matrix into one row per team member

    Args:
        matrix: Result of AggregationService.get_skill_matrix()

    Returns:
        List of dicts: 'Team Member', 'Role', then one column per skill name
        holding the level name
    """
    assessments = matrix.get("assessments") or {}
    rows = []

    for member in matrix["members"]:
        levels = assessments.get(str(member.id), {})
        row = {
            "Team Member": member.name,
            "Role": member.role,
        }
        for skill in matrix["skills"]:
            row[skill.name] = get_skill_level_name(levels.get(str(skill.id), 0))
        rows.append(row)

    return rows


def _headers(matrix: Dict[str, Any]) -> List[str]:
    return ["Team Member", "Role"] + [skill.name for skill in matrix["skills"]]


def export_skill_matrix_csv(matrix: Dict[str, Any]) -> io.BytesIO:
    """
    Export a skill matrix to CSV

    Returns:
        BytesIO with UTF-8 encoded CSV data
    """
    output = io.StringIO()
    writer = csv.writer(output)

    headers = _headers(matrix)
    writer.writerow(headers)

    for row in skill_matrix_rows(matrix):
        writer.writerow([row[header] for header in headers])

    output.seek(0)
    return io.BytesIO(output.getvalue().encode('utf-8'))


def export_skill_matrix_excel(matrix: Dict[str, Any], sheet_name: str = 'Skill Matrix') -> io.BytesIO:
    """
    Export a skill matrix to Excel

    Returns:
        BytesIO with the .xlsx workbook
    """
    df = pd.DataFrame(skill_matrix_rows(matrix), columns=_headers(matrix))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)

        # Fit column widths to content
        worksheet = writer.sheets[sheet_name]
        for column in worksheet.columns:
            column_letter = column[0].column_letter
            max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
            worksheet.column_dimensions[column_letter].width = min(max_length + 2, 50)

    output.seek(0)
    return output
