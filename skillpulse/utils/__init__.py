"""
Application utilities
"""

from .helpers import (
    AVATAR_COLORS,
    generate_avatar_initials,
    random_avatar_color,
    round_level,
    average_level,
    mean_level,
    absolute_growth,
    percentage_growth,
)
