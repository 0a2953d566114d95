"""
Weekly and monthly team reports
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from skillpulse import crud
from skillpulse.config import settings
from skillpulse.models import WeeklySnapshot
from skillpulse.services.aggregation_service import AggregationService
from skillpulse.utils import absolute_growth, mean_level

logger = logging.getLogger(__name__)

WEEKLY_PERIOD_DAYS = 7
MONTHLY_PERIOD_DAYS = 30


class ReportService:
    """Compose aggregation results into report documents"""

    def __init__(self, db: Session):
        self.db = db
        self.aggregation = AggregationService(db)

    def generate_weekly_report(self) -> Dict[str, Any]:
        """Current snapshot against the most recent earlier one, last 7 days"""
        return self._build_report("weekly", window=2, period_days=WEEKLY_PERIOD_DAYS)

    def generate_monthly_report(self) -> Dict[str, Any]:
        """Current snapshot against the oldest of the trailing snapshots, last 30 days"""
        return self._build_report(
            "monthly",
            window=settings.MONTHLY_REPORT_SNAPSHOTS,
            period_days=MONTHLY_PERIOD_DAYS,
        )

    def _baseline_snapshot(self, window: int) -> Tuple[Optional[WeeklySnapshot], int]:
        """
        Pick the snapshot to compare the current one against

        The window is the current snapshot plus the (window - 1) most recent
        non-current snapshots by week; the baseline is the oldest of those.
        Returns the baseline and the number of snapshots in the window.
        """
        if window < 2:
            return None, 1
        others = crud.get_non_current_snapshots(self.db, limit=window - 1)
        if not others:
            return None, 1
        return others[-1], len(others) + 1

    def skill_growth(self, current: WeeklySnapshot, baseline: Optional[WeeklySnapshot]) -> List[Dict[str, Any]]:
        """Per-skill current average, baseline average and absolute growth"""
        skills = crud.get_skills(self.db)
        team_size = crud.count_team_members(self.db)

        current_avgs = self.aggregation.skill_averages(current, team_size)
        baseline_avgs = self.aggregation.skill_averages(baseline, team_size)

        result = []
        for skill in skills:
            current_avg = current_avgs.get(skill.id, 0.0)
            previous_avg = baseline_avgs.get(skill.id, 0.0)
            result.append({
                "id": skill.id,
                "name": skill.name,
                "icon": skill.icon,
                "icon_color": skill.icon_color,
                "average_level": current_avg,
                "previous_level": previous_avg,
                "growth": absolute_growth(current_avg, previous_avg),
            })
        return result

    def _build_report(self, report_type: str, window: int, period_days: int) -> Dict[str, Any]:
        now = datetime.utcnow()
        current = crud.get_current_snapshot(self.db)

        skill_stats = []
        snapshots_analyzed = 0
        avg_skill_level = 0.0

        if current:
            baseline, snapshots_analyzed = self._baseline_snapshot(window)
            skill_stats = self.skill_growth(current, baseline)
            avg_skill_level = mean_level(
                a.level for a in crud.get_assessments_by_snapshot(self.db, current.id)
            )
        else:
            logger.info(f"No current snapshot, {report_type} report will be empty")

        growing = [s for s in skill_stats if s["growth"] > 0]
        # Skills that went backwards land in neither bucket
        stagnant = [s for s in skill_stats if s["growth"] == 0]

        top_skills = sorted(skill_stats, key=lambda s: s["average_level"], reverse=True)
        highest_growth = sorted(growing, key=lambda s: s["growth"], reverse=True)
        no_progress = sorted(stagnant, key=lambda s: s["average_level"])

        report = {
            "report_type": report_type,
            "generated_at": now,
            "period": {"start": now - timedelta(days=period_days), "end": now},
            "snapshots_analyzed": snapshots_analyzed,
            "team_size": crud.count_team_members(self.db),
            "total_skills": crud.count_skills(self.db),
            "avg_skill_level": avg_skill_level,
            "growth_areas": len(growing),
            "stagnant_areas": len(stagnant),
            "top_skills": top_skills[:settings.REPORT_TOP_SKILLS_LIMIT],
            "highest_growth": highest_growth[:settings.REPORT_HIGHLIGHT_LIMIT],
            "no_progress": no_progress[:settings.REPORT_HIGHLIGHT_LIMIT],
        }

        logger.info(
            f"Generated {report_type} report: {len(skill_stats)} skills, "
            f"{report['growth_areas']} growing, {report['stagnant_areas']} stagnant"
        )
        return report
