"""
SkillPulse Backend Application
Weekly skill tracking for small teams
"""

__version__ = "1.0.0"
__author__ = "SkillPulse Team"
__description__ = "Team skill matrix with week-over-week growth tracking"
