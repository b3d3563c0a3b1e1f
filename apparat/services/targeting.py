"""
Target selection for autonomous actions.

Each action type has one TargetRule: a candidate filter, an ordering and
whether to fall back to every candidate when the filter leaves nobody.
Among the best-ranked candidates the pick is weighted by the actor's
goals and memories about each candidate.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from apparat.models.actions import ActionType
from apparat.models.actor import Actor, CareerTrack
from apparat.models.config import AgencyConfig
from apparat.models.goals import GoalType
from apparat.models.memory import MemoryKind
from apparat.models.state import GameState
from apparat.skills.dice import weighted_draw

logger = logging.getLogger(__name__)

A = ActionType
T = CareerTrack

CandidateFilter = Callable[[Actor, Actor, GameState], bool]


# =============================================================================
# Constants
# =============================================================================

BASE_TARGET_WEIGHT = 10
MIN_TARGET_WEIGHT = 1
PARANOID_REACTION = 50
RUTHLESS_REACTION = 50

# Memory-driven bias toward or away from a target, per remembered kind
MEMORY_MODIFIERS: dict[MemoryKind, dict[ActionType, int]] = {
    MemoryKind.WAS_INVESTIGATED: {
        A.DENOUNCE: 20,
        A.LAUNCH_INVESTIGATION: 25,
        A.SABOTAGE_PROJECT: 15,
        A.FORM_ALLIANCE: -30,
        A.SHARE_INTELLIGENCE: -25,
    },
    MemoryKind.ALLIANCE_FORMED: {
        A.SHARE_INTELLIGENCE: 20,
        A.FORM_ALLIANCE: 10,
        A.BETRAY_ALLIANCE: -30,
        A.DENOUNCE: -20,
    },
    MemoryKind.ALLIANCE_BROKEN: {
        A.DENOUNCE: 25,
        A.LAUNCH_INVESTIGATION: 20,
        A.FORM_ALLIANCE: -40,
    },
    MemoryKind.CRISIS_COLLABORATION: {A.SHARE_INTELLIGENCE: 15, A.FORM_ALLIANCE: 10},
    MemoryKind.SECRET_SHARED: {A.SHARE_INTELLIGENCE: 15, A.FORM_ALLIANCE: 10},
    MemoryKind.PUBLIC_HUMILIATION: {
        A.DENOUNCE: 30,
        A.LAUNCH_INVESTIGATION: 25,
        A.FORM_ALLIANCE: -35,
    },
    MemoryKind.PROMOTION_BLOCKED: {
        A.BLOCK_PROMOTION: 20,
        A.SABOTAGE_PROJECT: 20,
        A.DENOUNCE: 15,
        A.FORM_ALLIANCE: -40,
        A.SHARE_INTELLIGENCE: -35,
        A.SEEK_PROTECTION: -30,
        A.CURRY_FAVOR: -25,
    },
    MemoryKind.BLOCKED_PROMOTION: {A.FORM_ALLIANCE: -30, A.SHARE_INTELLIGENCE: -25},
    MemoryKind.BETRAYAL: {
        A.DENOUNCE: 30,
        A.LAUNCH_INVESTIGATION: 25,
        A.FORM_ALLIANCE: -50,
        A.SHARE_INTELLIGENCE: -40,
        A.SEEK_PROTECTION: -45,
    },
}

THREAT_PARANOID_RESPONSE = {A.SEEK_PROTECTION: 20}
THREAT_RUTHLESS_RESPONSE = {A.DENOUNCE: 15}

# Bonus toward the named target of a goal
GOAL_TARGET_BONUS: dict[GoalType, tuple[frozenset[ActionType], int]] = {
    GoalType.DESTROY_RIVAL: (
        frozenset(
            {
                A.DENOUNCE,
                A.LAUNCH_INVESTIGATION,
                A.SPREAD_RUMORS,
                A.SABOTAGE_PROJECT,
                A.BLOCK_PROMOTION,
                A.DETAIN_SUSPECT,
            }
        ),
        30,
    ),
    GoalType.ELEVATE_ALLY: (frozenset({A.SHARE_INTELLIGENCE, A.FORM_ALLIANCE}), 25),
    GoalType.AVENGE_BETRAYAL: (
        frozenset({A.DENOUNCE, A.LAUNCH_INVESTIGATION, A.SPREAD_RUMORS, A.MAKE_IMPLICIT_THREAT}),
        35,
    ),
    GoalType.REPAY_DEBT: (frozenset({A.SHARE_INTELLIGENCE, A.FORM_ALLIANCE}), 25),
}


class TargetOrder(str, Enum):
    """How filtered candidates are ranked."""

    RANDOM = "random"
    HIGHEST_POSITION = "highest_position"
    MOST_CORRUPT = "most_corrupt"


@dataclass(frozen=True)
class TargetRule:
    """Candidate filter and ranking for one action type."""

    accepts: CandidateFilter
    order: TargetOrder = TargetOrder.RANDOM
    fallback_to_any: bool = False


# =============================================================================
# Filter Helpers
# =============================================================================


def _rival(actor: Actor, target: Actor, state: GameState) -> bool:
    edge = state.relationship(actor.id, target.id)
    return edge is not None and edge.is_rival


def _allied(actor: Actor, target: Actor, state: GameState) -> bool:
    edge = state.relationship(actor.id, target.id)
    return edge is not None and edge.is_allied


def _tracks(*tracks: CareerTrack) -> CandidateFilter:
    return lambda actor, target, state: target.track in tracks


def _higher(actor: Actor, target: Actor, state: GameState) -> bool:
    return target.position > actor.position


def _lower(actor: Actor, target: Actor, state: GameState) -> bool:
    return target.position < actor.position


def _not_above(actor: Actor, target: Actor, state: GameState) -> bool:
    return target.position <= actor.position


def _can_betray(min_age: int) -> CandidateFilter:
    def accepts(actor: Actor, target: Actor, state: GameState) -> bool:
        edge = state.relationship(actor.id, target.id)
        return edge is not None and edge.can_betray(state.turn, min_age)

    return accepts


def build_target_rules(betrayal_min_age: int) -> dict[ActionType, TargetRule]:
    """The targeting rule for every action type."""
    upward = TargetRule(_higher, TargetOrder.HIGHEST_POSITION)
    economic = TargetRule(_tracks(T.ECONOMIC_PLANNING, T.REGIONAL), fallback_to_any=True)
    crisis = TargetRule(
        lambda a, t, s: t.position >= 3 and not _rival(a, t, s), fallback_to_any=True
    )
    downward_reach = TargetRule(_not_above, fallback_to_any=True)

    return {
        # Scheming
        A.FORM_ALLIANCE: TargetRule(
            lambda a, t, s: (
                not _allied(a, t, s) and not _rival(a, t, s) and abs(t.position - a.position) <= 2
            )
        ),
        A.BETRAY_ALLIANCE: TargetRule(_can_betray(betrayal_min_age)),
        A.DENOUNCE: TargetRule(
            lambda a, t, s: _lower(a, t, s) or _rival(a, t, s), TargetOrder.MOST_CORRUPT
        ),
        A.BLOCK_PROMOTION: TargetRule(
            lambda a, t, s: t.position == a.position - 1 and t.track == a.track
        ),
        A.SPREAD_RUMORS: TargetRule(lambda a, t, s: _rival(a, t, s) or t.disposition < 30),
        A.SEEK_PROTECTION: upward,
        A.CULTIVATE_SUPPORT: TargetRule(lambda a, t, s: _lower(a, t, s) and not _rival(a, t, s)),
        A.SHARE_INTELLIGENCE: TargetRule(
            lambda a, t, s: abs(t.position - a.position) <= 1 and not _rival(a, t, s)
        ),
        A.ORGANIZE_GATHERING: TargetRule(
            lambda a, t, s: a.faction_id is not None and t.faction_id == a.faction_id,
            fallback_to_any=True,
        ),
        A.MAKE_IMPLICIT_THREAT: TargetRule(
            lambda a, t, s: (_rival(a, t, s) or t.disposition < 20) and _not_above(a, t, s)
        ),
        A.CURRY_FAVOR: upward,
        A.SABOTAGE_PROJECT: TargetRule(
            lambda a, t, s: (_rival(a, t, s) or t.track == a.track) and t.disposition < 40
        ),
        # Foreign affairs
        A.NEGOTIATE_TREATY: TargetRule(lambda a, t, s: t.position >= 3 and not _rival(a, t, s)),
        A.DIPLOMATIC_OUTREACH: TargetRule(
            lambda a, t, s: (
                not _rival(a, t, s) and t.track in (T.FOREIGN_AFFAIRS, T.STATE_MINISTRY)
            ),
            fallback_to_any=True,
        ),
        A.RECALL_AMBASSADOR: TargetRule(
            lambda a, t, s: t.position >= 4, TargetOrder.HIGHEST_POSITION
        ),
        # Economic planning
        A.SET_PRODUCTION_QUOTA: economic,
        A.ALLOCATE_RESOURCES: TargetRule(lambda a, t, s: 2 <= t.position <= a.position),
        A.PROPOSE_ECONOMIC_REFORM: upward,
        # Security
        A.LAUNCH_INVESTIGATION: TargetRule(
            lambda a, t, s: (
                _rival(a, t, s) or t.personality.corrupt > 50 or t.disposition < 30
            ),
            fallback_to_any=True,
        ),
        A.CONDUCT_SURVEILLANCE: TargetRule(
            lambda a, t, s: not _allied(a, t, s), fallback_to_any=True
        ),
        A.DETAIN_SUSPECT: TargetRule(
            lambda a, t, s: (
                _lower(a, t, s) and (t.fear_level > 30 or t.personality.corrupt > 60)
            )
        ),
        # Administration
        A.PROPOSE_LEGISLATION: upward,
        A.ADMINISTRATIVE_REFORM: TargetRule(
            lambda a, t, s: _not_above(a, t, s) and t.track == a.track, fallback_to_any=True
        ),
        A.MANAGE_CRISIS: crisis,
        # Party work
        A.IDEOLOGICAL_CAMPAIGN: downward_reach,
        A.CADRE_REVIEW: TargetRule(_lower),
        A.ENFORCE_DISCIPLINE: TargetRule(
            lambda a, t, s: (
                _lower(a, t, s) and (_rival(a, t, s) or t.personality.corrupt > 50)
            )
        ),
        # Military-political
        A.INSPECT_TROOP_LOYALTY: TargetRule(
            _tracks(T.MILITARY_POLITICAL, T.REGIONAL), fallback_to_any=True
        ),
        A.POLITICAL_INDOCTRINATION: downward_reach,
        A.VET_OFFICERS: TargetRule(_vet_officers_filter),
        # Leadership
        A.PROPOSE_POLICY_CHANGE: upward,
        A.CALL_EMERGENCY_MEETING: TargetRule(lambda a, t, s: t.position >= 3),
        A.ISSUE_DIRECTIVE: TargetRule(_lower),
        A.DEMAND_RESIGNATION: TargetRule(
            lambda a, t, s: _lower(a, t, s) and (_rival(a, t, s) or t.disposition < 30)
        ),
        A.REORGANIZE_DEPARTMENT: TargetRule(
            lambda a, t, s: t.track == a.track, fallback_to_any=True
        ),
        A.SET_NATIONAL_PRIORITY: TargetRule(lambda a, t, s: t.position >= 5),
        A.PROPOSE_LAW_CHANGE: TargetRule(lambda a, t, s: s.is_committee_member(t.id)),
        # Reactive
        A.RESPOND_TO_CRISIS: crisis,
        A.ADDRESS_SHORTAGE: economic,
        A.HANDLE_INCIDENT: TargetRule(
            _tracks(T.FOREIGN_AFFAIRS, T.SECURITY_SERVICES), fallback_to_any=True
        ),
        A.SUPPRESS_UNREST: TargetRule(
            _tracks(T.SECURITY_SERVICES, T.REGIONAL), fallback_to_any=True
        ),
    }


def _vet_officers_filter(actor: Actor, target: Actor, state: GameState) -> bool:
    """Military officers when any exist, otherwise any subordinate."""
    has_military = any(
        other.track == T.MILITARY_POLITICAL and other.id != actor.id
        for other in state.active_actors()
    )
    if has_military:
        return target.track == T.MILITARY_POLITICAL
    return _lower(actor, target, state)


# =============================================================================
# Weighting
# =============================================================================


def memory_modifier(actor: Actor, target_id: str, action: ActionType, turn: int) -> int:
    """
    Bias from the actor's significant memories about the target.

    Each memory contributes its table value scaled by its current strength.
    """
    traits = actor.personality
    total = 0
    for memory in actor.significant_memories_about(target_id, turn):
        strength = memory.strength_at(turn)
        table = dict(MEMORY_MODIFIERS.get(memory.kind, {}))
        if memory.kind == MemoryKind.THREAT_RECEIVED:
            if traits.paranoid > PARANOID_REACTION:
                table.update(THREAT_PARANOID_RESPONSE)
            if traits.ruthless > RUTHLESS_REACTION:
                table.update(THREAT_RUTHLESS_RESPONSE)
        value = table.get(action, 0)
        if value:
            total += int(value * strength / 100)
    return total


def goal_target_bonus(actor: Actor, target_id: str, action: ActionType) -> int:
    """Bonus when the target is the named target of one of the actor's goals."""
    bonus = 0
    for goal in actor.active_goals:
        if goal.target_id != target_id:
            continue
        entry = GOAL_TARGET_BONUS.get(goal.goal_type)
        if entry is not None and action in entry[0]:
            bonus += entry[1]
    return bonus


def _rank_key(order: TargetOrder) -> Callable[[Actor], int] | None:
    if order == TargetOrder.HIGHEST_POSITION:
        return lambda target: target.position
    if order == TargetOrder.MOST_CORRUPT:
        return lambda target: target.personality.corrupt
    return None


# =============================================================================
# Selector
# =============================================================================


@dataclass
class TargetSelector:
    """Picks the target of an autonomous action."""

    config: AgencyConfig = field(default_factory=AgencyConfig)
    rules: dict[ActionType, TargetRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.rules:
            self.rules = build_target_rules(self.config.betrayal_min_alliance_age)

    def candidates(
        self,
        actor: Actor,
        action: ActionType,
        state: GameState,
        exclude: Iterable[str] = (),
    ) -> list[Actor]:
        """
        Filtered candidate pool in stable id order.

        The player's patron and rival are never targets of autonomous actions.
        """
        excluded = set(exclude)
        pool = sorted(
            (
                other
                for other in state.active_actors()
                if other.id != actor.id
                and other.id not in excluded
                and not state.is_player_patron_or_rival(other.id)
            ),
            key=lambda other: other.id,
        )
        rule = self.rules[action]
        matching = [target for target in pool if rule.accepts(actor, target, state)]
        if not matching and rule.fallback_to_any:
            return pool
        return matching

    def target_weight(self, actor: Actor, target: Actor, action: ActionType, turn: int) -> int:
        return max(
            MIN_TARGET_WEIGHT,
            BASE_TARGET_WEIGHT
            + goal_target_bonus(actor, target.id, action)
            + memory_modifier(actor, target.id, action, turn),
        )

    def select_target(
        self,
        actor: Actor,
        action: ActionType,
        state: GameState,
        rng: random.Random,
        exclude: Iterable[str] = (),
    ) -> Actor | None:
        """
        Choose a target ignoring the pair cooldown.

        Returns:
            The chosen actor, or None when no candidate qualifies
        """
        pool = self.candidates(actor, action, state, exclude)
        if not pool:
            return None

        key = _rank_key(self.rules[action].order)
        if key is not None:
            best = max(key(target) for target in pool)
            pool = [target for target in pool if key(target) == best]

        weights = {
            target.id: self.target_weight(actor, target, action, state.turn) for target in pool
        }
        chosen = weighted_draw(weights, rng)
        return state.get_actor(chosen)

    def choose_target(
        self,
        actor: Actor,
        action: ActionType,
        state: GameState,
        rng: random.Random,
    ) -> Actor | None:
        """
        Choose a target honouring the pair cooldown.

        A target the actor interacted with too recently forces one
        re-selection excluding it. A second cooldown hit abandons the
        action.
        """
        first = self.select_target(actor, action, state, rng)
        if first is None or not self._on_cooldown(actor, first, state):
            return first

        logger.debug("%s -> %s on pair cooldown; reselecting", actor.id, first.id)
        second = self.select_target(actor, action, state, rng, exclude=(first.id,))
        if second is None or self._on_cooldown(actor, second, state):
            return None
        return second

    def _on_cooldown(self, actor: Actor, target: Actor, state: GameState) -> bool:
        edge = state.relationship(actor.id, target.id)
        return edge is not None and edge.on_cooldown(state.turn, self.config.pair_cooldown)
