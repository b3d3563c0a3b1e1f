"""
Dice and chance rolls.

Every roll takes an explicit random.Random so turn resolution stays
reproducible for a given seed.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from typing import TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PercentileResult(BaseModel):
    """Result of a d100 roll against a target number."""

    roll: int = Field(ge=1, le=100, description="The d100 result")
    target: int = Field(description="Roll at or under this to succeed")
    success: bool


def roll_range(low: int, high: int, rng: random.Random) -> int:
    """Roll an integer uniformly in [low, high], inclusive."""
    if high < low:
        raise ValueError(f"Invalid range: {low}..{high}")
    return rng.randint(low, high)


def roll_percentile(target: int, rng: random.Random) -> PercentileResult:
    """
    Roll d100 and compare against a target.

    Args:
        target: Succeed when the roll is at or under this value
        rng: Random source

    Returns:
        PercentileResult with the roll and outcome
    """
    roll = rng.randint(1, 100)
    return PercentileResult(roll=roll, target=target, success=roll <= target)


def roll_chance(probability: float, rng: random.Random) -> bool:
    """Return True with the given probability (clamped to 0.0-1.0)."""
    probability = max(0.0, min(1.0, probability))
    return rng.random() < probability


def pick(items: Sequence[T], rng: random.Random) -> T | None:
    """Pick one item uniformly, or None from an empty sequence."""
    if not items:
        return None
    return items[rng.randrange(len(items))]


def weighted_draw(weights: Mapping[T, int], rng: random.Random) -> T | None:
    """
    Draw one key with probability proportional to its weight.

    Non-positive weights are ignored. Iteration order of the mapping fixes
    the outcome for a given roll, so callers should pass an ordered mapping.

    Returns:
        The drawn key, or None if no weight is positive
    """
    candidates = [(key, weight) for key, weight in weights.items() if weight > 0]
    total = sum(weight for _, weight in candidates)
    if total <= 0:
        return None

    roll = rng.randint(0, total - 1)
    cumulative = 0
    for key, weight in candidates:
        cumulative += weight
        if roll < cumulative:
            return key
    return candidates[-1][0]
