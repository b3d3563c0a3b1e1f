"""
Directed relationship edges between actors.

A relationship describes how the source actor feels about the target.
Edges are asymmetric: A's view of B is independent of B's view of A.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

BETRAYAL_MIN_ALLIANCE_AGE = 3

_SIGNED_FIELDS = frozenset({"disposition"})
RELATIONSHIP_FIELDS = (
    "disposition",
    "trust",
    "fear",
    "respect",
    "grudge",
    "gratitude",
    "alliance_strength",
)


class AllianceBreakReason(str, Enum):
    """Why an alliance ended."""

    MUTUAL_AGREEMENT = "mutual_agreement"
    BETRAYAL = "betrayal"
    EXTERNAL_PRESSURE = "external_pressure"
    DIVERGING_INTERESTS = "diverging_interests"


class RelationshipStance(str, Enum):
    """Summary label for an edge."""

    STRONG_ALLY = "strong_ally"
    WEAK_ALLY = "weak_ally"
    BITTER_ENEMY = "bitter_enemy"
    RIVAL = "rival"
    FRIENDLY = "friendly"
    HOSTILE = "hostile"
    DISTRUSTFUL = "distrustful"
    TRUSTING = "trusting"
    NEUTRAL = "neutral"


class Relationship(BaseModel):
    """How the source actor regards the target actor."""

    source_id: str
    target_id: str

    disposition: Annotated[int, Field(ge=-100, le=100)] = 0
    trust: Annotated[int, Field(ge=0, le=100)] = 50
    fear: Annotated[int, Field(ge=0, le=100)] = 0
    respect: Annotated[int, Field(ge=0, le=100)] = 50
    grudge: Annotated[int, Field(ge=0, le=100)] = 0
    gratitude: Annotated[int, Field(ge=0, le=100)] = 0

    is_allied: bool = False
    alliance_strength: Annotated[int, Field(ge=0, le=100)] = 0
    alliance_formed_turn: int | None = None

    is_rival: bool = False
    is_client: bool = False
    """Source is a client of the target."""

    is_patron: bool = False
    """Source is a patron of the target."""

    created_turn: int = 0
    last_interaction_turn: int | None = None
    times_betrayed: int = 0
    times_benefited: int = 0

    @model_validator(mode="after")
    def check_alliance_rivalry_exclusive(self) -> Relationship:
        if self.is_allied and self.is_rival:
            raise ValueError("A relationship cannot be both allied and rival")
        return self

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def adjust(self, field: str, delta: int) -> int:
        """Shift a numeric field, clamped to its declared range."""
        if field not in RELATIONSHIP_FIELDS:
            raise ValueError(f"Unknown relationship field: {field}")
        low = -100 if field in _SIGNED_FIELDS else 0
        value = max(low, min(100, getattr(self, field) + delta))
        setattr(self, field, value)
        return value

    def touch(self, turn: int) -> None:
        self.last_interaction_turn = turn

    def form_alliance(self, turn: int, strength: int) -> None:
        self.is_allied = True
        self.is_rival = False
        self.alliance_strength = max(0, min(100, strength))
        self.alliance_formed_turn = turn
        self.disposition = max(self.disposition, 30)
        self.adjust("trust", 10)
        self.touch(turn)

    def break_alliance(self, turn: int, reason: AllianceBreakReason) -> None:
        self.is_allied = False
        self.alliance_strength = 0
        self.alliance_formed_turn = None
        if reason == AllianceBreakReason.BETRAYAL:
            self.is_rival = True
            self.adjust("grudge", 40)
            self.adjust("trust", -30)
        elif reason == AllianceBreakReason.EXTERNAL_PRESSURE:
            self.adjust("trust", -10)
        self.touch(turn)

    def record_betrayal(self, turn: int, severity: int) -> None:
        """The target betrayed the source."""
        self.adjust("disposition", -severity)
        self.adjust("trust", -(severity // 2))
        self.adjust("grudge", severity)
        self.times_betrayed += 1
        if self.is_allied:
            self.is_allied = False
            self.alliance_strength = 0
            self.alliance_formed_turn = None
            self.is_rival = True
        self.touch(turn)

    def record_benefit(self, turn: int, magnitude: int) -> None:
        """The target did the source a good turn."""
        self.adjust("disposition", magnitude // 2)
        self.adjust("trust", magnitude // 4)
        self.adjust("gratitude", magnitude // 2)
        self.times_benefited += 1
        self.touch(turn)

    def declare_rivalry(self, turn: int) -> None:
        self.is_rival = True
        self.is_allied = False
        self.alliance_strength = 0
        self.alliance_formed_turn = None
        self.disposition = min(0, self.disposition)
        self.touch(turn)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def alliance_age(self, turn: int) -> int | None:
        if not self.is_allied or self.alliance_formed_turn is None:
            return None
        return turn - self.alliance_formed_turn

    def can_betray(self, turn: int, min_age: int = BETRAYAL_MIN_ALLIANCE_AGE) -> bool:
        """An alliance must have matured before it can be betrayed."""
        age = self.alliance_age(turn)
        return age is not None and age >= min_age

    def on_cooldown(self, turn: int, cooldown: int) -> bool:
        if self.last_interaction_turn is None:
            return False
        return turn - self.last_interaction_turn < cooldown

    @property
    def overall_quality(self) -> int:
        quality = (
            self.disposition
            + (self.trust - 50) // 2
            + (self.respect - 50) // 2
            + self.gratitude // 3
            - self.grudge // 2
        )
        if self.is_allied:
            quality += 20
        if self.is_rival:
            quality -= 30
        return max(-100, min(100, quality))

    @property
    def would_help(self) -> bool:
        if self.is_allied and self.alliance_strength >= 30:
            return True
        return self.overall_quality >= 40 and self.trust >= 40

    @property
    def would_oppose(self) -> bool:
        return self.is_rival or self.overall_quality <= -40 or self.grudge >= 60

    @property
    def would_betray(self) -> bool:
        if self.is_allied and self.alliance_strength >= 60:
            return False
        return self.grudge + (100 - self.fear) >= 120 or self.times_betrayed > 0

    @property
    def stance(self) -> RelationshipStance:
        if self.is_allied:
            if self.alliance_strength >= 50:
                return RelationshipStance.STRONG_ALLY
            return RelationshipStance.WEAK_ALLY
        if self.is_rival:
            if self.grudge >= 50:
                return RelationshipStance.BITTER_ENEMY
            return RelationshipStance.RIVAL
        if self.disposition >= 60:
            return RelationshipStance.FRIENDLY
        if self.disposition <= -60:
            return RelationshipStance.HOSTILE
        if self.disposition <= -20:
            return RelationshipStance.DISTRUSTFUL
        if self.trust >= 60:
            return RelationshipStance.TRUSTING
        return RelationshipStance.NEUTRAL
