"""
Political actor models.

An actor is a simulated non-player political character: personality,
position in the apparatus, goals, needs, memories and personal gauges.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

from apparat.models.espionage import EspionageStatus
from apparat.models.goals import MAX_ACTIVE_GOALS, Goal
from apparat.models.memory import ActorMemory
from apparat.models.needs import Needs

Gauge = Annotated[int, Field(ge=0, le=100)]
SignedGauge = Annotated[int, Field(ge=-100, le=100)]

TOP_LEADERSHIP_POSITION = 7


class CareerTrack(str, Enum):
    """Career specialisations that gate governance actions."""

    PARTY_APPARATUS = "party_apparatus"
    SECURITY_SERVICES = "security_services"
    MILITARY_POLITICAL = "military_political"
    FOREIGN_AFFAIRS = "foreign_affairs"
    ECONOMIC_PLANNING = "economic_planning"
    STATE_MINISTRY = "state_ministry"
    REGIONAL = "regional"
    SHARED = "shared"
    """Top leadership, not tied to one apparatus."""


class ActorRole(str, Enum):
    """An actor's narrative role relative to the player."""

    LEADER = "leader"
    PATRON = "patron"
    RIVAL = "rival"
    ALLY = "ally"
    NEUTRAL = "neutral"
    SUBORDINATE = "subordinate"
    INFORMANT = "informant"
    CONTACT = "contact"


class ActorStatus(str, Enum):
    """Career fate of an actor."""

    ACTIVE = "active"
    DEAD = "dead"
    EXILED = "exiled"
    IMPRISONED = "imprisoned"
    RETIRED = "retired"
    DISAPPEARED = "disappeared"
    UNDER_INVESTIGATION = "under_investigation"
    DETAINED = "detained"
    REHABILITATED = "rehabilitated"
    EXECUTED = "executed"

    @property
    def is_fallen(self) -> bool:
        return self not in (ActorStatus.ACTIVE, ActorStatus.REHABILITATED)


class Personality(BaseModel):
    """
    Six political temperament traits, each 0-100.

    Personality is fixed at creation; only rare narrative events change it.
    """

    ambitious: Gauge = 50
    """Drive to climb. High: schemes for promotion and policy influence."""

    paranoid: Gauge = 50
    """Sense of threat. High: seeks protection, watches everyone."""

    ruthless: Gauge = 50
    """Willingness to destroy others. High: denounces, investigates, detains."""

    competent: Gauge = 50
    """Administrative skill. High: reforms, legislation, intelligence work."""

    loyal: Gauge = 50
    """Devotion to allies and the Party. High: never betrays, ideological work."""

    corrupt: Gauge = 50
    """Appetite for personal enrichment."""


class Interaction(BaseModel):
    """One line of an actor's interaction history."""

    turn: int
    other_id: str
    action: str
    description: str
    disposition_change: int = 0


class Actor(BaseModel):
    """A political character driven by the simulation."""

    id: str
    name: str
    faction_id: str | None = None

    track: CareerTrack = CareerTrack.PARTY_APPARATUS
    position: Annotated[int, Field(ge=0)] = 0
    """Seniority within the track; 0 is the lowest rung."""

    role: ActorRole = ActorRole.NEUTRAL
    status: ActorStatus = ActorStatus.ACTIVE
    status_turn: int | None = None
    status_details: str | None = None

    personality: Personality = Field(default_factory=Personality)

    # Personal gauges
    disposition: SignedGauge = 0
    """General attitude toward the player."""

    fear_level: Gauge = 0
    grudge_level: Gauge = 0
    trust_level: Gauge = 50
    gratitude_level: Gauge = 0
    aggression_level: Gauge = 50

    goals: list[Goal] = Field(default_factory=list)
    needs: Needs = Field(default_factory=Needs)
    memories: list[ActorMemory] = Field(default_factory=list)
    espionage: EspionageStatus | None = None

    last_action_turn: int | None = None
    """Turn of this actor's last self-initiated action."""

    discovered: bool = False
    """Surfaced to the player through play rather than the opening cast."""

    interactions: list[Interaction] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_active_goal_limit(self) -> Actor:
        if len(self.active_goals) > MAX_ACTIVE_GOALS:
            raise ValueError(f"An actor may hold at most {MAX_ACTIVE_GOALS} active goals")
        return self

    @property
    def is_active(self) -> bool:
        return not self.status.is_fallen

    @property
    def is_top_leadership(self) -> bool:
        return self.position >= TOP_LEADERSHIP_POSITION

    @property
    def active_goals(self) -> list[Goal]:
        return [goal for goal in self.goals if goal.active]

    @property
    def is_active_spy(self) -> bool:
        return self.espionage is not None and self.is_active

    def set_goals(self, goals: list[Goal]) -> None:
        """Replace goals, keeping only the highest-priority active ones."""
        ranked = sorted(goals, key=lambda goal: goal.priority, reverse=True)
        self.goals = [goal for goal in ranked if goal.active][:MAX_ACTIVE_GOALS]

    def add_memory(self, memory: ActorMemory) -> None:
        self.memories.append(memory)

    def memories_about(self, other_id: str) -> list[ActorMemory]:
        return [memory for memory in self.memories if memory.other_id == other_id]

    def significant_memories_about(self, other_id: str, turn: int) -> list[ActorMemory]:
        return [m for m in self.memories_about(other_id) if m.is_significant_at(turn)]

    def record_interaction(self, interaction: Interaction) -> None:
        self.interactions.append(interaction)

    def recent_interactions(self, turn: int, window: int) -> list[Interaction]:
        return [i for i in self.interactions if turn - i.turn <= window]

    def adjust_gauge(self, field: str, delta: int) -> int:
        """Shift a personal gauge, clamped to its range. Returns the new value."""
        low = -100 if field == "disposition" else 0
        value = max(low, min(100, getattr(self, field) + delta))
        setattr(self, field, value)
        return value

    def set_status(self, status: ActorStatus, turn: int, details: str | None = None) -> None:
        self.status = status
        self.status_turn = turn
        self.status_details = details


# =============================================================================
# Factory Functions
# =============================================================================


def create_actor(
    actor_id: str,
    name: str,
    *,
    track: CareerTrack = CareerTrack.PARTY_APPARATUS,
    position: int = 0,
    faction_id: str | None = None,
    role: ActorRole = ActorRole.NEUTRAL,
    ambitious: int = 50,
    paranoid: int = 50,
    ruthless: int = 50,
    competent: int = 50,
    loyal: int = 50,
    corrupt: int = 50,
    disposition: int = 0,
) -> Actor:
    """
    Create an actor with the given personality.

    Args:
        actor_id: Stable identifier
        name: Display name
        track: Career track
        position: Seniority within the track (0 = lowest)
        faction_id: Faction affiliation, if any
        role: Narrative role relative to the player
        ambitious: Drive to climb (0-100)
        paranoid: Sense of threat (0-100)
        ruthless: Willingness to destroy others (0-100)
        competent: Administrative skill (0-100)
        loyal: Devotion to allies and the Party (0-100)
        corrupt: Appetite for enrichment (0-100)
        disposition: Attitude toward the player (-100 to 100)

    Returns:
        A new Actor instance
    """
    return Actor(
        id=actor_id,
        name=name,
        track=track,
        position=position,
        faction_id=faction_id,
        role=role,
        personality=Personality(
            ambitious=ambitious,
            paranoid=paranoid,
            ruthless=ruthless,
            competent=competent,
            loyal=loyal,
            corrupt=corrupt,
        ),
        disposition=disposition,
    )
