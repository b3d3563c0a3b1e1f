"""
Explicit game state threaded through every operation.

Turn resolution takes a GameState and returns a new one; nothing in the
simulation reaches for a global.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from apparat.models.actor import Actor, CareerTrack
from apparat.models.event import EventCooldowns
from apparat.models.ledger import Ledger
from apparat.models.relationship import Relationship


class GameState(BaseModel):
    """Actors, relationships and the ledger for one game session."""

    turn: int = 1
    actors: dict[str, Actor] = Field(default_factory=dict)
    relationships: dict[tuple[str, str], Relationship] = Field(default_factory=dict)
    ledger: Ledger = Field(default_factory=Ledger)

    player_track: CareerTrack | None = None
    player_position: int = 0
    patron_id: str | None = None
    rival_id: str | None = None
    standing_committee: set[str] = Field(default_factory=set)
    faction_names: dict[str, str] = Field(default_factory=dict)

    event_cooldowns: EventCooldowns = Field(default_factory=EventCooldowns)
    last_event_importance: int | None = None

    def add_actor(self, actor: Actor) -> None:
        if actor.id in self.actors:
            raise ValueError(f"Actor '{actor.id}' already exists")
        self.actors[actor.id] = actor

    def get_actor(self, actor_id: str | None) -> Actor | None:
        """Look up an actor; unknown or missing ids return None."""
        if actor_id is None:
            return None
        return self.actors.get(actor_id)

    def active_actors(self) -> list[Actor]:
        return [actor for actor in self.actors.values() if actor.is_active]

    def relationship(self, source_id: str, target_id: str) -> Relationship | None:
        return self.relationships.get((source_id, target_id))

    def is_player_patron_or_rival(self, actor_id: str) -> bool:
        return actor_id in (self.patron_id, self.rival_id)

    def is_committee_member(self, actor_id: str) -> bool:
        return actor_id in self.standing_committee

    def faction_name(self, faction_id: str | None) -> str:
        if faction_id is None:
            return ""
        return self.faction_names.get(faction_id, "")
