"""
Derived dashboard views computed from raw assessment rows
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from skillpulse import crud
from skillpulse.config import settings
from skillpulse.models import SkillAssessment, SkillLevel, WeeklySnapshot
from skillpulse.utils import average_level, mean_level, percentage_growth, round_level

logger = logging.getLogger(__name__)

LevelIndex = Dict[Tuple[int, int], int]


def index_levels(assessments: List[SkillAssessment]) -> LevelIndex:
    """(team_member_id, skill_id) -> level"""
    return {(a.team_member_id, a.skill_id): a.level for a in assessments}


def levels_by_skill(assessments: List[SkillAssessment]) -> Dict[int, List[int]]:
    """skill_id -> levels of every assessment row for that skill"""
    grouped = defaultdict(list)
    for a in assessments:
        grouped[a.skill_id].append(a.level)
    return grouped


class AggregationService:
    """
    Read-only views over team members, skills and snapshots.

    Every per-skill average divides by the team size, so members without an
    assessment count as level 0. A missing current snapshot is an empty
    state: the views return empty or zero values instead of raising.
    """

    def __init__(self, db: Session):
        self.db = db

    def _snapshot_levels(self, snapshot: Optional[WeeklySnapshot]) -> List[SkillAssessment]:
        if snapshot is None:
            return []
        return crud.get_assessments_by_snapshot(self.db, snapshot.id)

    def skill_averages(
        self,
        snapshot: Optional[WeeklySnapshot],
        team_size: int
    ) -> Dict[int, float]:
        """skill_id -> average level in a snapshot; skills without rows are absent"""
        grouped = levels_by_skill(self._snapshot_levels(snapshot))
        return {skill_id: average_level(levels, team_size) for skill_id, levels in grouped.items()}

    def get_skill_matrix(self) -> Dict[str, Any]:
        """Current level of every member in every skill, 0 where unassessed"""
        members = crud.get_team_members(self.db)
        skills = crud.get_skills(self.db)
        current = crud.get_current_snapshot(self.db)

        if not current:
            return {"members": members, "skills": skills, "assessments": {}}

        levels = index_levels(self._snapshot_levels(current))
        matrix = {
            str(member.id): {
                str(skill.id): levels.get((member.id, skill.id), SkillLevel.UNKNOWN.value)
                for skill in skills
            }
            for member in members
        }

        return {"members": members, "skills": skills, "assessments": matrix}

    def get_weekly_comparison(self) -> Dict[str, Any]:
        """Per-skill averages for the current and previous snapshot"""
        skills = crud.get_skills(self.db)
        current = crud.get_current_snapshot(self.db)

        if not current:
            return {"skills": skills, "current_week": [], "previous_week": []}

        previous = crud.get_previous_snapshot(self.db)
        team_size = crud.count_team_members(self.db)

        current_avgs = self.skill_averages(current, team_size)
        previous_avgs = self.skill_averages(previous, team_size)

        return {
            "skills": skills,
            "current_week": [current_avgs.get(skill.id, 0.0) for skill in skills],
            "previous_week": [previous_avgs.get(skill.id, 0.0) for skill in skills],
        }

    def get_growth_per_skill(self, weeks: Optional[int] = None) -> Dict[str, Any]:
        """
        Per-skill averages over the most recent snapshots

        Snapshots are fetched newest first and returned oldest first;
        data[skill_id][i] belongs to snapshots[i].
        """
        weeks = weeks or settings.GROWTH_HISTORY_WEEKS
        skills = crud.get_skills(self.db)
        snapshots = crud.get_snapshots(self.db, limit=weeks)
        team_size = crud.count_team_members(self.db)

        data = {skill.id: [] for skill in skills}
        for snapshot in snapshots:
            averages = self.skill_averages(snapshot, team_size)
            for skill in skills:
                data[skill.id].append(averages.get(skill.id, 0.0))

        # Display order is oldest -> newest
        for skill_id in data:
            data[skill_id].reverse()

        return {"snapshots": list(reversed(snapshots)), "skills": skills, "data": data}

    def get_team_stats(self) -> Dict[str, Any]:
        """Team size, skill count, average level and growth/stagnation counts"""
        members = crud.get_team_members(self.db)
        skills = crud.get_skills(self.db)
        current = crud.get_current_snapshot(self.db)

        stats = {
            "team_size": len(members),
            "total_skills": len(skills),
            "avg_skill_level": 0.0,
            "growth_areas": 0,
            "stagnant_areas": 0,
            "avg_skill_level_change": 0.0,
        }

        if not current:
            return stats

        current_rows = self._snapshot_levels(current)
        stats["avg_skill_level"] = mean_level(a.level for a in current_rows)

        previous = crud.get_previous_snapshot(self.db)
        if not previous:
            return stats

        previous_rows = self._snapshot_levels(previous)
        previous_avg = mean_level(a.level for a in previous_rows)
        if previous_avg > 0:
            stats["avg_skill_level_change"] = round_level(stats["avg_skill_level"] - previous_avg)

        current_levels = index_levels(current_rows)
        previous_levels = index_levels(previous_rows)

        for skill in skills:
            has_growth = False
            has_stagnation = False

            for member in members:
                key = (member.id, skill.id)
                if key not in current_levels or key not in previous_levels:
                    continue

                now, before = current_levels[key], previous_levels[key]
                if now > before:
                    has_growth = True
                elif now == before and now < SkillLevel.EXPERT:
                    has_stagnation = True

            # A skill is either a growth area or stagnant, never both
            if has_growth:
                stats["growth_areas"] += 1
            elif has_stagnation:
                stats["stagnant_areas"] += 1

        return stats

    def get_top_skills(self) -> List[Dict[str, Any]]:
        """Skills by current average, highest first, with percentage growth"""
        current = crud.get_current_snapshot(self.db)
        if not current:
            return []

        skills = crud.get_skills(self.db)
        previous = crud.get_previous_snapshot(self.db)
        team_size = crud.count_team_members(self.db)

        current_avgs = self.skill_averages(current, team_size)
        previous_avgs = self.skill_averages(previous, team_size)

        result = []
        for skill in skills:
            current_avg = current_avgs.get(skill.id, 0.0)
            previous_avg = previous_avgs.get(skill.id, 0.0)
            result.append({
                "id": skill.id,
                "name": skill.name,
                "icon": skill.icon,
                "icon_color": skill.icon_color,
                "average_level": current_avg,
                "growth": percentage_growth(current_avg, previous_avg),
            })

        # sorted() is stable, ties keep skill order
        return sorted(result, key=lambda s: s["average_level"], reverse=True)
