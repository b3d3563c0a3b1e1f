"""
Psychological needs for political actors.

Each need is a 0-100 gauge. Low values create pressure that biases
action selection toward actions that satisfy the need.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field


class NeedKind(str, Enum):
    """The six needs every actor carries."""

    SECURITY = "security"
    POWER = "power"
    LOYALTY = "loyalty"
    RECOGNITION = "recognition"
    STABILITY = "stability"
    IDEOLOGICAL_COMMITMENT = "ideological_commitment"


# Needs that count toward a critical state (ideology excluded)
_CRITICAL_NEEDS = (
    NeedKind.SECURITY,
    NeedKind.POWER,
    NeedKind.LOYALTY,
    NeedKind.RECOGNITION,
    NeedKind.STABILITY,
)

CRITICAL_NEED_THRESHOLD = 25
TRUE_BELIEVER_THRESHOLD = 75
DISILLUSIONED_THRESHOLD = 25


class Needs(BaseModel):
    """Need gauges for one actor."""

    security: Annotated[int, Field(ge=0, le=100)] = 60
    """Freedom from fear of arrest, purge or demotion."""

    power: Annotated[int, Field(ge=0, le=100)] = 50
    """Sense of control over people and resources."""

    loyalty: Annotated[int, Field(ge=0, le=100)] = 60
    """Belonging to a faction or network."""

    recognition: Annotated[int, Field(ge=0, le=100)] = 50
    """Being seen and credited by superiors."""

    stability: Annotated[int, Field(ge=0, le=100)] = 60
    """Predictability of the actor's world."""

    ideological_commitment: Annotated[int, Field(ge=0, le=100)] = 50
    """Belief in the Party line."""

    def value(self, kind: NeedKind) -> int:
        return getattr(self, kind.value)

    def set_value(self, kind: NeedKind, value: int) -> None:
        setattr(self, kind.value, max(0, min(100, value)))

    def adjust(self, kind: NeedKind, delta: int) -> int:
        """Shift a need by delta, clamped to 0-100. Returns the new value."""
        self.set_value(kind, self.value(kind) + delta)
        return self.value(kind)

    @property
    def most_urgent(self) -> NeedKind:
        """The need with the lowest gauge (first in declaration order on ties)."""
        return min(NeedKind, key=self.value)

    @property
    def urgency_level(self) -> int:
        return 100 - self.value(self.most_urgent)

    @property
    def is_true_believer(self) -> bool:
        return self.ideological_commitment >= TRUE_BELIEVER_THRESHOLD

    @property
    def is_disillusioned(self) -> bool:
        return self.ideological_commitment <= DISILLUSIONED_THRESHOLD

    @property
    def has_critical_need(self) -> bool:
        return min(self.value(k) for k in _CRITICAL_NEEDS) < CRITICAL_NEED_THRESHOLD
