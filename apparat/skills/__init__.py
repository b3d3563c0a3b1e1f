"""
Stateless chance skills for Apparat.

Pure functions over an explicit random source. They never hold state
between calls.
"""

from apparat.skills.dice import (
    PercentileResult,
    pick,
    roll_chance,
    roll_percentile,
    roll_range,
    weighted_draw,
)

__all__ = [
    "PercentileResult",
    "pick",
    "roll_chance",
    "roll_percentile",
    "roll_range",
    "weighted_draw",
]
