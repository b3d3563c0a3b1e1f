"""
Relationship lifecycle service.

Creates, initialises and decays the directed relationship edges between
actors. Edge lookups for unknown pairs succeed by creating the edge.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from apparat.models.actor import Actor
from apparat.models.config import RelationshipDecayConfig
from apparat.models.relationship import Relationship
from apparat.models.state import GameState
from apparat.skills.dice import roll_chance, roll_range

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Fixed baselines for lazily created edges
SAME_FACTION_DISPOSITION = 20
SAME_FACTION_TRUST = 60
OTHER_FACTION_DISPOSITION = -10
OTHER_FACTION_TRUST = 40

# Track and hierarchy adjustments
PEER_COMPETITOR_PENALTY = 15  # same track, same position
COLLEAGUE_BONUS = 10  # same track, different position
PEER_RIVALRY_CHANCE = 0.3
SUPERIOR_FEAR_BASE = 20
SUPERIOR_RESPECT_BASE = 40
FEAR_PER_LEVEL = 10
RESPECT_PER_LEVEL = 10
SUBORDINATE_RESPECT = 30
RUTHLESS_TARGET_THRESHOLD = 70
RUTHLESS_TARGET_FEAR = 20


def _same_faction(source: Actor, target: Actor) -> bool:
    return source.faction_id is not None and source.faction_id == target.faction_id


def _apply_structure(edge: Relationship, source: Actor, target: Actor) -> bool:
    """
    Apply track and hierarchy adjustments shared by both creation paths.

    Returns True when source and target are same-track, same-position peers.
    """
    peers = False
    if source.track == target.track:
        if source.position == target.position:
            edge.adjust("disposition", -PEER_COMPETITOR_PENALTY)
            peers = True
        else:
            edge.adjust("disposition", COLLEAGUE_BONUS)

    gap = target.position - source.position
    if gap > 0:
        edge.fear = min(100, SUPERIOR_FEAR_BASE + gap * FEAR_PER_LEVEL)
        edge.respect = min(100, SUPERIOR_RESPECT_BASE + gap * RESPECT_PER_LEVEL)
    elif gap < 0:
        edge.fear = 0
        edge.respect = SUBORDINATE_RESPECT

    if target.personality.ruthless > RUTHLESS_TARGET_THRESHOLD:
        edge.adjust("fear", RUTHLESS_TARGET_FEAR)
    return peers


@dataclass
class RelationshipService:
    """Owns the lifecycle of relationship edges in a GameState."""

    decay: RelationshipDecayConfig = field(default_factory=RelationshipDecayConfig)

    def initialize_all(self, state: GameState, rng: random.Random) -> int:
        """
        Create edges for every ordered pair of eligible actors.

        Eligible actors are active and are neither the player's patron nor
        rival. Existing edges are left untouched.

        Returns:
            Number of edges created
        """
        eligible = [
            actor
            for actor in state.active_actors()
            if not state.is_player_patron_or_rival(actor.id)
        ]
        created = 0
        for source in eligible:
            for target in eligible:
                if source.id == target.id or (source.id, target.id) in state.relationships:
                    continue
                state.relationships[(source.id, target.id)] = self._seed_edge(
                    source, target, state.turn, rng
                )
                created += 1
        logger.debug("Initialised %d relationship edges", created)
        return created

    def _seed_edge(
        self, source: Actor, target: Actor, turn: int, rng: random.Random
    ) -> Relationship:
        edge = Relationship(source_id=source.id, target_id=target.id, created_turn=turn)
        if _same_faction(source, target):
            edge.adjust("disposition", 20 + roll_range(0, 20, rng))
            edge.trust = 50 + roll_range(0, 20, rng)
        else:
            edge.adjust("disposition", -10 + roll_range(-10, 10, rng))
            edge.trust = 40 + roll_range(-10, 10, rng)

        if _apply_structure(edge, source, target) and roll_chance(PEER_RIVALRY_CHANCE, rng):
            edge.is_rival = True
        return edge

    def get_or_create(self, state: GameState, source_id: str, target_id: str) -> Relationship:
        """
        Return the edge source -> target, creating it with fixed baselines.

        Calling this twice without an intervening mutation returns the same
        edge with the same values.
        """
        existing = state.relationships.get((source_id, target_id))
        if existing is not None:
            return existing

        edge = Relationship(source_id=source_id, target_id=target_id, created_turn=state.turn)
        source = state.get_actor(source_id)
        target = state.get_actor(target_id)
        if source is not None and target is not None:
            if _same_faction(source, target):
                edge.disposition = SAME_FACTION_DISPOSITION
                edge.trust = SAME_FACTION_TRUST
            else:
                edge.disposition = OTHER_FACTION_DISPOSITION
                edge.trust = OTHER_FACTION_TRUST
            _apply_structure(edge, source, target)

        state.relationships[(source_id, target_id)] = edge
        return edge

    def decay_all(self, state: GameState) -> None:
        """Drift every edge's extreme attributes toward neutral."""
        for edge in state.relationships.values():
            self.decay_edge(edge, state.turn)

    def decay_edge(self, edge: Relationship, turn: int) -> None:
        """Apply one turn of decay to a single edge."""
        anchor = edge.last_interaction_turn
        if anchor is None:
            anchor = edge.created_turn
        quiet = turn - anchor
        cfg = self.decay

        if quiet > cfg.grudge_quiet_turns and edge.grudge > 0:
            edge.adjust("grudge", -cfg.grudge_decay)
        if quiet > cfg.gratitude_quiet_turns and edge.gratitude > 0:
            edge.adjust("gratitude", -cfg.gratitude_decay)
        if quiet > cfg.fear_quiet_turns and edge.fear > cfg.fear_floor:
            edge.fear = max(cfg.fear_floor, edge.fear - cfg.fear_decay)
        if quiet > cfg.disposition_quiet_turns and edge.disposition != 0:
            step = min(cfg.disposition_drift, abs(edge.disposition))
            edge.adjust("disposition", -step if edge.disposition > 0 else step)

    def is_allied(self, state: GameState, source_id: str, target_id: str) -> bool:
        edge = state.relationship(source_id, target_id)
        return edge is not None and edge.is_allied

    def is_rival(self, state: GameState, source_id: str, target_id: str) -> bool:
        edge = state.relationship(source_id, target_id)
        return edge is not None and edge.is_rival

    def has_patron(self, state: GameState, actor_id: str) -> bool:
        """Whether the actor is a client of anyone."""
        return any(
            edge.is_client
            for (source_id, _), edge in state.relationships.items()
            if source_id == actor_id
        )
