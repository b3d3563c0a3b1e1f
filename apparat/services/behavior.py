"""
Goal and need bookkeeping for actors.

Assigns initial goals and needs, advances goals after actions, and erodes
or satisfies needs each turn.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from apparat.models.actions import ActionType
from apparat.models.actor import Actor, ActorStatus
from apparat.models.config import NeedDecayConfig
from apparat.models.goals import Goal, GoalType, create_goal
from apparat.models.ledger import Indicator
from apparat.models.needs import NeedKind, Needs
from apparat.models.state import GameState
from apparat.services.relationships import RelationshipService
from apparat.skills.dice import pick

# =============================================================================
# Constants
# =============================================================================

FAILURE_FRUSTRATION = 15
FAILURE_RECOGNITION_LOSS = 10
CRISIS_STABILITY = 40  # national stability below this erodes security and stability
SENIOR_POSITION = 5
JUNIOR_POSITION = 2

DEVOTION_GOALS = (
    GoalType.SERVE_THE_PARTY,
    GoalType.DEFEND_PARTY_ORTHODOXY,
    GoalType.ROOT_OUT_TRAITORS,
    GoalType.STRENGTHEN_THE_STATE,
)

# Progress gained per successful action, by goal
GOAL_PROGRESS: dict[GoalType, dict[ActionType, int]] = {
    GoalType.SEEK_PROMOTION: {
        ActionType.CURRY_FAVOR: 10,
        ActionType.BLOCK_PROMOTION: 15,
        ActionType.PROPOSE_POLICY_CHANGE: 20,
    },
    GoalType.DESTROY_RIVAL: {
        ActionType.DENOUNCE: 20,
        ActionType.LAUNCH_INVESTIGATION: 30,
        ActionType.DETAIN_SUSPECT: 40,
    },
    GoalType.BUILD_FACTION: {
        ActionType.FORM_ALLIANCE: 20,
        ActionType.CULTIVATE_SUPPORT: 15,
        ActionType.ORGANIZE_GATHERING: 15,
    },
    GoalType.ROOT_OUT_TRAITORS: {
        ActionType.LAUNCH_INVESTIGATION: 15,
        ActionType.DETAIN_SUSPECT: 25,
        ActionType.DENOUNCE: 15,
    },
    GoalType.FIND_PROTECTOR: {
        ActionType.SEEK_PROTECTION: 50,
        ActionType.CURRY_FAVOR: 20,
    },
}

# Actions that count as an attempt at a goal, for frustration on failure
GOAL_ATTEMPTS: dict[GoalType, frozenset[ActionType]] = {
    GoalType.SEEK_PROMOTION: frozenset(
        {ActionType.CURRY_FAVOR, ActionType.BLOCK_PROMOTION, ActionType.PROPOSE_POLICY_CHANGE}
    ),
    GoalType.DESTROY_RIVAL: frozenset(
        {
            ActionType.DENOUNCE,
            ActionType.LAUNCH_INVESTIGATION,
            ActionType.SPREAD_RUMORS,
            ActionType.SABOTAGE_PROJECT,
        }
    ),
    GoalType.BUILD_FACTION: frozenset(
        {ActionType.FORM_ALLIANCE, ActionType.CULTIVATE_SUPPORT, ActionType.ORGANIZE_GATHERING}
    ),
    GoalType.FIND_PROTECTOR: frozenset({ActionType.SEEK_PROTECTION, ActionType.CURRY_FAVOR}),
    GoalType.ROOT_OUT_TRAITORS: frozenset(
        {
            ActionType.LAUNCH_INVESTIGATION,
            ActionType.CONDUCT_SURVEILLANCE,
            ActionType.DENOUNCE,
            ActionType.DETAIN_SUSPECT,
        }
    ),
}

# Need changes after a successful action
NEED_UPDATES: dict[ActionType, dict[NeedKind, int]] = {
    ActionType.SEEK_PROTECTION: {NeedKind.SECURITY: 20},
    ActionType.FORM_ALLIANCE: {NeedKind.LOYALTY: 15, NeedKind.SECURITY: 10},
    ActionType.CURRY_FAVOR: {NeedKind.RECOGNITION: 10},
    ActionType.PROPOSE_POLICY_CHANGE: {NeedKind.POWER: 15, NeedKind.RECOGNITION: 10},
    ActionType.SET_NATIONAL_PRIORITY: {NeedKind.POWER: 15, NeedKind.RECOGNITION: 10},
    ActionType.PROPOSE_LAW_CHANGE: {NeedKind.POWER: 20, NeedKind.RECOGNITION: 15},
    ActionType.DENOUNCE: {NeedKind.SECURITY: -5, NeedKind.POWER: 10},
    ActionType.LAUNCH_INVESTIGATION: {NeedKind.SECURITY: -5, NeedKind.POWER: 10},
    ActionType.ORGANIZE_GATHERING: {NeedKind.LOYALTY: 10, NeedKind.RECOGNITION: 5},
    ActionType.IDEOLOGICAL_CAMPAIGN: {
        NeedKind.IDEOLOGICAL_COMMITMENT: 10,
        NeedKind.RECOGNITION: 5,
    },
    ActionType.MANAGE_CRISIS: {NeedKind.STABILITY: 15},
    ActionType.RESPOND_TO_CRISIS: {NeedKind.STABILITY: 15},
    ActionType.ISSUE_DIRECTIVE: {NeedKind.POWER: 15},
    ActionType.DEMAND_RESIGNATION: {NeedKind.POWER: 15},
    ActionType.CULTIVATE_SUPPORT: {NeedKind.LOYALTY: 10},
}


def goal_matches_action(goal: Goal, action: ActionType) -> bool:
    """Whether an action counts as an attempt at the goal."""
    return action in GOAL_ATTEMPTS.get(goal.goal_type, frozenset())


def _strongest_rival_id(state: GameState, actor_id: str) -> str | None:
    rivals = [
        edge
        for (source_id, _), edge in state.relationships.items()
        if source_id == actor_id and edge.is_rival
    ]
    if not rivals:
        return None
    return min(rivals, key=lambda edge: edge.disposition).target_id


@dataclass
class BehaviorService:
    """Maintains actor goals and needs."""

    need_decay: NeedDecayConfig = field(default_factory=NeedDecayConfig)
    relationships: RelationshipService = field(default_factory=RelationshipService)

    # -------------------------------------------------------------------------
    # Initialisation
    # -------------------------------------------------------------------------

    def initial_needs(self, actor: Actor) -> Needs:
        """Derive starting needs from personality, position and faction."""
        traits = actor.personality
        needs = Needs()
        needs.set_value(NeedKind.SECURITY, 60 - traits.paranoid // 4 + actor.position * 3)
        needs.set_value(NeedKind.POWER, 40 + actor.position * 5)
        needs.set_value(NeedKind.RECOGNITION, 50)
        needs.set_value(NeedKind.STABILITY, 60 - traits.ambitious // 5)
        needs.set_value(NeedKind.LOYALTY, 60 if actor.faction_id is not None else 45)
        needs.set_value(NeedKind.IDEOLOGICAL_COMMITMENT, 30 + traits.loyal // 2)
        return needs

    def assign_initial_goals(self, actor: Actor, state: GameState, rng: random.Random) -> list[Goal]:
        """Choose up to three starting goals and set them on the actor."""
        traits = actor.personality
        turn = state.turn
        goals: list[Goal] = []

        if traits.ambitious > 60 and actor.position < 6:
            goals.append(
                create_goal(
                    GoalType.SEEK_PROMOTION, priority=70 + traits.ambitious // 5, turn=turn
                )
            )
        elif traits.ambitious > 80 and actor.position >= 6:
            goals.append(create_goal(GoalType.JOIN_POLITBURO, priority=80, turn=turn))
        elif traits.paranoid > 60:
            goals.append(
                create_goal(
                    GoalType.PROTECT_POSITION, priority=70 + traits.paranoid // 5, turn=turn
                )
            )

        if actor.needs.is_true_believer:
            devotion = pick(DEVOTION_GOALS, rng)
            if devotion is not None:
                goals.append(create_goal(devotion, priority=75, turn=turn))

        rival_id = _strongest_rival_id(state, actor.id)
        if rival_id is not None and traits.ruthless > 50:
            goals.append(
                create_goal(
                    GoalType.DESTROY_RIVAL,
                    priority=50 + traits.ruthless // 5,
                    turn=turn,
                    target_id=rival_id,
                )
            )

        if actor.status == ActorStatus.UNDER_INVESTIGATION:
            goals.append(create_goal(GoalType.CLEAR_NAME, priority=95, turn=turn))

        if actor.needs.security < 30 and actor.id != state.patron_id:
            goals.append(create_goal(GoalType.FIND_PROTECTOR, priority=80, turn=turn))

        if traits.corrupt > 60:
            goals.append(
                create_goal(
                    GoalType.ACCUMULATE_WEALTH, priority=40 + traits.corrupt // 4, turn=turn
                )
            )

        actor.set_goals(goals)
        return actor.goals

    def initialize_actor(self, actor: Actor, state: GameState, rng: random.Random) -> None:
        """Give an actor needs and goals unless it already has both."""
        if actor.goals and actor.needs != Needs():
            return
        actor.needs = self.initial_needs(actor)
        self.assign_initial_goals(actor, state, rng)

    def initialize_all(self, state: GameState, rng: random.Random) -> None:
        for actor in state.active_actors():
            self.initialize_actor(actor, state, rng)

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    def update_goal_progress(
        self,
        actor: Actor,
        action: ActionType,
        target_id: str | None,
        success: bool,
        turn: int,
    ) -> None:
        """Advance matching goals on success, frustrate them on failure."""
        for goal in actor.active_goals:
            if not success:
                if goal_matches_action(goal, action):
                    goal.frustrate(FAILURE_FRUSTRATION, turn)
                continue

            if goal.goal_type.requires_target and goal.target_id != target_id:
                continue
            amount = GOAL_PROGRESS.get(goal.goal_type, {}).get(action, 0)
            goal.advance(amount, turn)

    # -------------------------------------------------------------------------
    # Needs
    # -------------------------------------------------------------------------

    def decay_needs(self, actor: Actor, state: GameState) -> None:
        """Apply one turn of need erosion and situational relief."""
        cfg = self.need_decay
        needs = actor.needs

        needs.adjust(NeedKind.SECURITY, -cfg.security)
        needs.adjust(NeedKind.POWER, -cfg.power)
        needs.adjust(NeedKind.LOYALTY, -cfg.loyalty)
        needs.adjust(NeedKind.RECOGNITION, -cfg.recognition)
        needs.adjust(NeedKind.STABILITY, -cfg.stability)

        if actor.position >= SENIOR_POSITION:
            needs.adjust(NeedKind.POWER, cfg.senior_power_gain)
            needs.adjust(NeedKind.RECOGNITION, cfg.senior_recognition_gain)
        if actor.position <= JUNIOR_POSITION:
            needs.adjust(NeedKind.SECURITY, -cfg.junior_security)

        if state.ledger.get(Indicator.STABILITY) < CRISIS_STABILITY:
            needs.adjust(NeedKind.SECURITY, -cfg.crisis_penalty)
            needs.adjust(NeedKind.STABILITY, -cfg.crisis_penalty)

        if actor.faction_id is not None:
            needs.adjust(NeedKind.LOYALTY, cfg.faction_loyalty_gain)

        if actor.id == state.patron_id or self.relationships.has_patron(state, actor.id):
            needs.adjust(NeedKind.SECURITY, cfg.protected_security_gain)

    def decay_all_needs(self, state: GameState) -> None:
        for actor in state.active_actors():
            self.decay_needs(actor, state)

    def update_needs_after_action(self, actor: Actor, action: ActionType, success: bool) -> None:
        if not success:
            actor.needs.adjust(NeedKind.RECOGNITION, -FAILURE_RECOGNITION_LOSS)
            return
        for kind, delta in NEED_UPDATES.get(action, {}).items():
            actor.needs.adjust(kind, delta)
