"""
Structured narrative events.

The simulation never renders prose. It hands structured events to a sink
and a collaborator turns them into text.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from apparat.models.actions import ActionType
from apparat.models.ledger import Indicator


class EventCategory(str, Enum):
    """What kind of narrative event this is."""

    CHARACTER_MESSAGE = "character_message"
    CHARACTER_SUMMONS = "character_summons"
    RIVAL_ACTION = "rival_action"
    PATRON_DIRECTIVE = "patron_directive"
    NETWORK_INTEL = "network_intel"
    ALLY_REQUEST = "ally_request"


class EventPriority(int, Enum):
    """Display priority tiers; higher values surface first."""

    BACKGROUND = 0
    NORMAL = 1
    ELEVATED = 2
    URGENT = 3


# Minimum turns between two events of the same category
CATEGORY_COOLDOWNS: dict[EventCategory, int] = {
    EventCategory.PATRON_DIRECTIVE: 3,
    EventCategory.CHARACTER_SUMMONS: 4,
    EventCategory.RIVAL_ACTION: 5,
    EventCategory.CHARACTER_MESSAGE: 3,
    EventCategory.NETWORK_INTEL: 3,
    EventCategory.ALLY_REQUEST: 3,
}


class ResponseOption(BaseModel):
    """A player-selectable reply to an event."""

    key: str
    label: str
    effects: dict[Indicator, int] = Field(default_factory=dict)
    sets_flag: str | None = None


class NarrativeEvent(BaseModel):
    """A structured event handed to the narrative sink."""

    category: EventCategory
    priority: EventPriority
    kind: str
    """Template key the renderer uses, e.g. "patron_warning"."""

    turn: int
    initiator_id: str
    target_id: str | None = None
    action: ActionType | None = None
    is_urgent: bool = False
    responses: list[ResponseOption] = Field(default_factory=list)


class EventCooldowns(BaseModel):
    """Last turn each event category fired."""

    last_fired: dict[EventCategory, int] = Field(default_factory=dict)

    def is_on_cooldown(self, category: EventCategory, turn: int) -> bool:
        last = self.last_fired.get(category)
        if last is None:
            return False
        return turn - last < CATEGORY_COOLDOWNS[category]

    def record(self, category: EventCategory, turn: int) -> None:
        self.last_fired[category] = turn
