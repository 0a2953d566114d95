"""
Utility functions for SkillPulse application
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
import random

AVATAR_COLORS = [
    "#4f46e5",  # Indigo
    "#06b6d4",  # Cyan
    "#ec4899",  # Pink
    "#f59e0b",  # Amber
    "#10b981",  # Emerald
    "#8b5cf6",  # Violet
    "#3b82f6",  # Blue
]

def generate_avatar_initials(name: str) -> str:
    """Generate avatar initials from name"""
    if not name or not name.strip():
        return "??"

    parts = name.split()
    if len(parts) >= 2:
        return (parts[0][0] + parts[-1][0]).upper()
    elif len(name.strip()) >= 2:
        return name.strip()[:2].upper()
    else:
        return name.strip()[0].upper() + "?"

def random_avatar_color() -> str:
    return random.choice(AVATAR_COLORS)

def round_level(value: float) -> float:
    """Round the exact binary value to one decimal place, halves away from zero"""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

def average_level(levels: Iterable[int], denominator: int) -> float:
    """
    Sum of levels divided by a fixed denominator (the team size, not the
    number of levels), rounded to one decimal. Empty input or an empty team
    averages to 0.
    """
    levels = list(levels)
    if not levels or denominator <= 0:
        return 0.0
    return round_level(sum(levels) / denominator)

def mean_level(levels: Iterable[int]) -> float:
    """Flat mean of levels, rounded to one decimal; 0 for no levels"""
    levels = list(levels)
    if not levels:
        return 0.0
    return round_level(sum(levels) / len(levels))

def absolute_growth(current: float, previous: Optional[float]) -> float:
    """Difference of two averages in level units"""
    return round_level(current - (previous or 0.0))

def percentage_growth(current: float, previous: Optional[float]) -> float:
    """Relative change in percent; 0 when there is no positive baseline"""
    if not previous or previous <= 0:
        return 0.0
    return round_level((current - previous) / previous * 100)
