"""
Memory models for political actors.

Memories are append-only records of past interactions. Their influence
fades linearly with the number of turns since they were formed.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

DEFAULT_DECAY_RATE = 5
SIGNIFICANT_SEVERITY = 50
SIGNIFICANT_STRENGTH = 30


class MemoryKind(str, Enum):
    """Kinds of memories actors form."""

    BETRAYAL = "betrayal"
    FAVOR = "favor"
    HUMILIATION = "humiliation"
    PROTECTION = "protection"
    SLIGHT = "slight"
    KINDNESS = "kindness"
    LAW_CHANGE = "law_change"
    PROMOTION = "promotion"
    DEMOTION = "demotion"
    FAMILY_MATTER = "family_matter"
    FACTION_ACTION = "faction_action"
    WAS_INVESTIGATED = "was_investigated"
    INVESTIGATED_OTHER = "investigated_other"
    PROMOTION_BLOCKED = "promotion_blocked"
    """Someone blocked my promotion."""

    BLOCKED_PROMOTION = "blocked_promotion"
    """I blocked someone's promotion."""

    ALLIANCE_FORMED = "alliance_formed"
    ALLIANCE_BROKEN = "alliance_broken"
    WAS_DETAINED = "was_detained"
    DETAINED_OTHER = "detained_other"
    RECEIVED_DIRECTIVE = "received_directive"
    ISSUED_DIRECTIVE = "issued_directive"
    CRISIS_COLLABORATION = "crisis_collaboration"
    PUBLIC_HUMILIATION = "public_humiliation"
    SECRET_SHARED = "secret_shared"
    THREAT_RECEIVED = "threat_received"
    THREAT_ISSUED = "threat_issued"
    CAUGHT_SPY = "caught_spy"
    SUSPECTED_OF_ESPIONAGE = "suspected_of_espionage"
    RECRUITED_BY_FOREIGN = "recruited_by_foreign"
    REPORTED_TRAITOR = "reported_traitor"
    WAS_REPORTED_AS_TRAITOR = "was_reported_as_traitor"
    IDEOLOGICAL_VICTORY = "ideological_victory"
    IDEOLOGICAL_DEFEAT = "ideological_defeat"
    PARTY_COMMENDATION = "party_commendation"
    PARTY_REPRIMAND = "party_reprimand"

    @property
    def is_negative(self) -> bool:
        return self in _NEGATIVE_KINDS

    @property
    def is_positive(self) -> bool:
        return self in _POSITIVE_KINDS


_NEGATIVE_KINDS = frozenset(
    {
        MemoryKind.BETRAYAL,
        MemoryKind.HUMILIATION,
        MemoryKind.SLIGHT,
        MemoryKind.DEMOTION,
        MemoryKind.WAS_INVESTIGATED,
        MemoryKind.PROMOTION_BLOCKED,
        MemoryKind.ALLIANCE_BROKEN,
        MemoryKind.WAS_DETAINED,
        MemoryKind.PUBLIC_HUMILIATION,
        MemoryKind.THREAT_RECEIVED,
        MemoryKind.SUSPECTED_OF_ESPIONAGE,
        MemoryKind.WAS_REPORTED_AS_TRAITOR,
        MemoryKind.IDEOLOGICAL_DEFEAT,
        MemoryKind.PARTY_REPRIMAND,
    }
)

_POSITIVE_KINDS = frozenset(
    {
        MemoryKind.FAVOR,
        MemoryKind.PROTECTION,
        MemoryKind.KINDNESS,
        MemoryKind.PROMOTION,
        MemoryKind.ALLIANCE_FORMED,
        MemoryKind.CRISIS_COLLABORATION,
        MemoryKind.SECRET_SHARED,
        MemoryKind.CAUGHT_SPY,
        MemoryKind.IDEOLOGICAL_VICTORY,
        MemoryKind.PARTY_COMMENDATION,
    }
)


class ActorMemory(BaseModel):
    """A single remembered interaction."""

    kind: MemoryKind
    turn: int
    """Turn the memory was formed."""

    other_id: str | None = None
    """The other actor involved, if any."""

    severity: Annotated[int, Field(ge=0, le=100)] = 50
    sentiment: Annotated[int, Field(ge=-100, le=100)] = 0
    description: str = ""

    decay_rate: Annotated[int, Field(ge=0)] = DEFAULT_DECAY_RATE
    """Strength lost per ten turns elapsed."""

    def strength_at(self, turn: int) -> int:
        """Effective strength (0-100) as of the given turn."""
        elapsed = max(0, turn - self.turn)
        return max(0, 100 - elapsed * self.decay_rate // 10)

    def is_significant_at(self, turn: int) -> bool:
        """Severe enough and fresh enough to shape behaviour."""
        return (
            self.severity >= SIGNIFICANT_SEVERITY
            and self.strength_at(turn) >= SIGNIFICANT_STRENGTH
        )


def create_memory(
    kind: MemoryKind,
    turn: int,
    *,
    other_id: str | None = None,
    severity: int = 50,
    sentiment: int = 0,
    description: str = "",
) -> ActorMemory:
    """
    Create a new memory, clamping severity and sentiment into range.

    Args:
        kind: What kind of memory this is
        turn: Turn the memory is formed
        other_id: The other actor involved
        severity: 0 (trivial) to 100 (life-changing)
        sentiment: -100 (hostile) to +100 (warm)
        description: Short human-readable summary

    Returns:
        A new ActorMemory instance
    """
    return ActorMemory(
        kind=kind,
        turn=turn,
        other_id=other_id,
        severity=max(0, min(100, severity)),
        sentiment=max(-100, min(100, sentiment)),
        description=description,
    )
