"""
Autonomous action selection.

For an eligible actor, computes a weight for every permitted action type
from personality, position, national crisis signals, active goals, unmet
needs and ideological devotion, then draws one action.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from apparat.models.actions import ActionType, can_perform
from apparat.models.actor import Actor
from apparat.models.config import AgencyConfig
from apparat.models.goals import GoalType
from apparat.models.ledger import Indicator
from apparat.models.needs import NeedKind
from apparat.models.state import GameState
from apparat.skills.dice import roll_chance, weighted_draw

logger = logging.getLogger(__name__)

A = ActionType


# =============================================================================
# Constants
# =============================================================================

TRAIT_THRESHOLD = 60
DEVOTION_THRESHOLD = 70
NEED_PRESSURE_THRESHOLD = 40
TRUE_BELIEVER_NEED = 70
DISILLUSIONED_NEED = 30
FALLBACK_ACTION = A.SPREAD_RUMORS

# Personality style bonuses (trait above TRAIT_THRESHOLD)
AMBITIOUS_BONUSES: dict[ActionType, int] = {
    A.BLOCK_PROMOTION: 15,
    A.CURRY_FAVOR: 10,
    A.PROPOSE_POLICY_CHANGE: 15,
    A.SET_NATIONAL_PRIORITY: 15,
    A.PROPOSE_LAW_CHANGE: 20,
}
RUTHLESS_BONUSES: dict[ActionType, int] = {
    A.DENOUNCE: 20,
    A.BETRAY_ALLIANCE: 10,
    A.MAKE_IMPLICIT_THREAT: 15,
    A.SABOTAGE_PROJECT: 12,
    A.LAUNCH_INVESTIGATION: 15,
    A.DETAIN_SUSPECT: 15,
    A.DEMAND_RESIGNATION: 10,
    A.ENFORCE_DISCIPLINE: 10,
}
COMPETENT_BONUSES: dict[ActionType, int] = {
    A.SPREAD_RUMORS: 15,
    A.SHARE_INTELLIGENCE: 10,
    A.PROPOSE_ECONOMIC_REFORM: 15,
    A.ADMINISTRATIVE_REFORM: 10,
    A.PROPOSE_LEGISLATION: 10,
    A.PROPOSE_LAW_CHANGE: 15,
}
PARANOID_BONUSES: dict[ActionType, int] = {
    A.SEEK_PROTECTION: 20,
    A.MAKE_IMPLICIT_THREAT: 10,
    A.CONDUCT_SURVEILLANCE: 15,
    A.LAUNCH_INVESTIGATION: 10,
    A.CADRE_REVIEW: 10,
}
LOYAL_BONUSES: dict[ActionType, int] = {
    A.FORM_ALLIANCE: 15,
    A.SHARE_INTELLIGENCE: 10,
    A.IDEOLOGICAL_CAMPAIGN: 10,
    A.POLITICAL_INDOCTRINATION: 10,
}

# Position tiers
SENIOR_BONUSES: dict[ActionType, int] = {
    A.ORGANIZE_GATHERING: 15,
    A.MAKE_IMPLICIT_THREAT: 10,
    A.ISSUE_DIRECTIVE: 15,
    A.CALL_EMERGENCY_MEETING: 10,
}
JUNIOR_BONUSES: dict[ActionType, int] = {
    A.CURRY_FAVOR: 20,
    A.SEEK_PROTECTION: 10,
}
COMMITTEE_LAW_BONUS = 25

# National conditions
UNSTABLE_BONUSES: dict[ActionType, int] = {
    A.DENOUNCE: 10,
    A.BETRAY_ALLIANCE: 10,
    A.MAKE_IMPLICIT_THREAT: 10,
    A.SUPPRESS_UNREST: 25,
    A.MANAGE_CRISIS: 20,
    A.RESPOND_TO_CRISIS: 20,
}
SHORTAGE_BONUSES: dict[ActionType, int] = {
    A.ADDRESS_SHORTAGE: 25,
    A.SET_PRODUCTION_QUOTA: 15,
    A.ALLOCATE_RESOURCES: 15,
}
DIPLOMATIC_BONUSES: dict[ActionType, int] = {
    A.HANDLE_INCIDENT: 20,
    A.DIPLOMATIC_OUTREACH: 15,
    A.NEGOTIATE_TREATY: 10,
}
STABLE_BONUSES: dict[ActionType, int] = {
    A.FORM_ALLIANCE: 10,
    A.ORGANIZE_GATHERING: 10,
    A.CULTIVATE_SUPPORT: 10,
}

# Per-goal bonuses applied to every action while the goal is active
GOAL_ALIGNMENT: dict[GoalType, dict[ActionType, int]] = {
    # Career
    GoalType.SEEK_PROMOTION: {
        A.CURRY_FAVOR: 15,
        A.BLOCK_PROMOTION: 10,
        A.PROPOSE_POLICY_CHANGE: 10,
    },
    GoalType.BECOME_TRACK_HEAD: {
        A.CURRY_FAVOR: 20,
        A.BLOCK_PROMOTION: 15,
        A.CULTIVATE_SUPPORT: 15,
        A.PROPOSE_POLICY_CHANGE: 15,
    },
    GoalType.JOIN_POLITBURO: {
        A.CURRY_FAVOR: 20,
        A.BLOCK_PROMOTION: 15,
        A.CULTIVATE_SUPPORT: 15,
        A.PROPOSE_POLICY_CHANGE: 15,
    },
    GoalType.PROTECT_POSITION: {
        A.SEEK_PROTECTION: 20,
        A.FORM_ALLIANCE: 15,
        A.CURRY_FAVOR: 10,
        A.MAKE_IMPLICIT_THREAT: 10,
    },
    # Relationship
    GoalType.DESTROY_RIVAL: {
        A.DENOUNCE: 20,
        A.LAUNCH_INVESTIGATION: 25,
        A.SPREAD_RUMORS: 15,
        A.SABOTAGE_PROJECT: 15,
        A.BLOCK_PROMOTION: 15,
    },
    GoalType.ELEVATE_ALLY: {A.SHARE_INTELLIGENCE: 15, A.CURRY_FAVOR: 10},
    GoalType.AVENGE_BETRAYAL: {
        A.DENOUNCE: 25,
        A.LAUNCH_INVESTIGATION: 20,
        A.SPREAD_RUMORS: 15,
        A.MAKE_IMPLICIT_THREAT: 15,
    },
    GoalType.REPAY_DEBT: {A.SHARE_INTELLIGENCE: 15, A.FORM_ALLIANCE: 15},
    # Power
    GoalType.BUILD_FACTION: {
        A.FORM_ALLIANCE: 20,
        A.CULTIVATE_SUPPORT: 15,
        A.ORGANIZE_GATHERING: 15,
        A.SHARE_INTELLIGENCE: 10,
    },
    GoalType.ACCUMULATE_WEALTH: {A.ALLOCATE_RESOURCES: 15, A.SABOTAGE_PROJECT: 10},
    GoalType.EXPAND_INFLUENCE: {
        A.CULTIVATE_SUPPORT: 20,
        A.FORM_ALLIANCE: 15,
        A.ORGANIZE_GATHERING: 15,
    },
    # Ideological
    GoalType.IMPLEMENT_REFORM: {
        A.PROPOSE_POLICY_CHANGE: 20,
        A.PROPOSE_LEGISLATION: 20,
        A.PROPOSE_ECONOMIC_REFORM: 20,
        A.ADMINISTRATIVE_REFORM: 15,
    },
    GoalType.MAINTAIN_ORTHODOXY: {
        A.IDEOLOGICAL_CAMPAIGN: 20,
        A.ENFORCE_DISCIPLINE: 15,
        A.CADRE_REVIEW: 15,
    },
    GoalType.PURGE_ENEMIES: {
        A.LAUNCH_INVESTIGATION: 25,
        A.DENOUNCE: 20,
        A.DETAIN_SUSPECT: 20,
        A.DEMAND_RESIGNATION: 15,
    },
    # Party devotion
    GoalType.SERVE_THE_PARTY: {
        A.IDEOLOGICAL_CAMPAIGN: 25,
        A.ENFORCE_DISCIPLINE: 20,
        A.CADRE_REVIEW: 15,
        A.LAUNCH_INVESTIGATION: 15,
        A.CURRY_FAVOR: -10,
    },
    GoalType.DEFEND_PARTY_ORTHODOXY: {
        A.IDEOLOGICAL_CAMPAIGN: 25,
        A.ENFORCE_DISCIPLINE: 20,
        A.PROPOSE_LEGISLATION: 15,
        A.DENOUNCE: 15,
    },
    GoalType.ROOT_OUT_TRAITORS: {
        A.LAUNCH_INVESTIGATION: 30,
        A.CONDUCT_SURVEILLANCE: 25,
        A.DENOUNCE: 20,
        A.CADRE_REVIEW: 20,
        A.DETAIN_SUSPECT: 25,
    },
    GoalType.STRENGTHEN_THE_STATE: {
        A.SET_PRODUCTION_QUOTA: 15,
        A.ALLOCATE_RESOURCES: 15,
        A.ADMINISTRATIVE_REFORM: 15,
        A.PROPOSE_LEGISLATION: 15,
    },
    # Espionage
    GoalType.SPY_FOR_FOREIGN_POWER: {
        A.SHARE_INTELLIGENCE: 20,
        A.CONDUCT_SURVEILLANCE: 15,
        A.DENOUNCE: -15,
        A.LAUNCH_INVESTIGATION: -10,
        A.CURRY_FAVOR: 10,
    },
    GoalType.RECRUIT_ASSETS: {
        A.SHARE_INTELLIGENCE: 20,
        A.CULTIVATE_SUPPORT: 15,
        A.ORGANIZE_GATHERING: 10,
    },
    GoalType.SABOTAGE_FROM_WITHIN: {A.SABOTAGE_PROJECT: 25, A.SPREAD_RUMORS: 15},
    GoalType.AVOID_DETECTION: {
        A.SEEK_PROTECTION: 20,
        A.FORM_ALLIANCE: 15,
        A.CURRY_FAVOR: 15,
        A.DENOUNCE: -25,
        A.MAKE_IMPLICIT_THREAT: -20,
        A.LAUNCH_INVESTIGATION: -15,
    },
    # Survival
    GoalType.AVOID_PURGE: {
        A.SEEK_PROTECTION: 25,
        A.CURRY_FAVOR: 15,
        A.FORM_ALLIANCE: 15,
        A.DENOUNCE: -20,
    },
    GoalType.CLEAR_NAME: {
        A.CURRY_FAVOR: 25,
        A.SEEK_PROTECTION: 20,
        A.SHARE_INTELLIGENCE: 15,
    },
    GoalType.ESCAPE_DETENTION: {A.SEEK_PROTECTION: 30, A.CURRY_FAVOR: 20},
    GoalType.FIND_PROTECTOR: {
        A.SEEK_PROTECTION: 30,
        A.CURRY_FAVOR: 25,
        A.FORM_ALLIANCE: 15,
    },
    # Diplomatic
    GoalType.IMPROVE_ALLY_RELATIONS: {
        A.CURRY_FAVOR: 15,
        A.FORM_ALLIANCE: 20,
        A.SHARE_INTELLIGENCE: 10,
    },
    GoalType.CONTAIN_CAPITALIST_THREAT: {
        A.CONDUCT_SURVEILLANCE: 15,
        A.LAUNCH_INVESTIGATION: 10,
        A.IDEOLOGICAL_CAMPAIGN: 15,
    },
    GoalType.EXPAND_TRADE_NETWORK: {A.ALLOCATE_RESOURCES: 15, A.FORM_ALLIANCE: 10},
    GoalType.DEFUSE_INTERNATIONAL_CRISIS: {A.CURRY_FAVOR: 15, A.SHARE_INTELLIGENCE: 15},
    GoalType.ADVANCE_IDEOLOGICAL_GOALS: {A.IDEOLOGICAL_CAMPAIGN: 25, A.PROPOSE_LEGISLATION: 15},
    GoalType.PROPOSE_FOREIGN_POLICY: {
        A.PROPOSE_POLICY_CHANGE: 25,
        A.PROPOSE_LEGISLATION: 20,
        A.CULTIVATE_SUPPORT: 15,
    },
    GoalType.NEGOTIATE_TREATY: {A.FORM_ALLIANCE: 20, A.CURRY_FAVOR: 10},
    # Security services
    GoalType.INVESTIGATE_CORRUPTION: {
        A.LAUNCH_INVESTIGATION: 30,
        A.CONDUCT_SURVEILLANCE: 25,
        A.CADRE_REVIEW: 20,
        A.DETAIN_SUSPECT: 20,
    },
    GoalType.EXPAND_SURVEILLANCE: {
        A.CONDUCT_SURVEILLANCE: 30,
        A.LAUNCH_INVESTIGATION: 15,
        A.PROPOSE_POLICY_CHANGE: 15,
    },
    GoalType.CONDUCT_PURGE: {
        A.LAUNCH_INVESTIGATION: 30,
        A.DENOUNCE: 25,
        A.DETAIN_SUSPECT: 25,
        A.DEMAND_RESIGNATION: 20,
        A.ENFORCE_DISCIPLINE: 20,
    },
    GoalType.BUILD_DOSSIERS: {
        A.CONDUCT_SURVEILLANCE: 30,
        A.LAUNCH_INVESTIGATION: 20,
        A.SHARE_INTELLIGENCE: 15,
    },
    GoalType.PROTECT_PATRON: {
        A.SEEK_PROTECTION: 20,
        A.CURRY_FAVOR: 20,
        A.SHARE_INTELLIGENCE: 15,
        A.DENOUNCE: -25,
        A.LAUNCH_INVESTIGATION: -20,
    },
    GoalType.PROTECT_REGIME: {
        A.LAUNCH_INVESTIGATION: 20,
        A.CONDUCT_SURVEILLANCE: 20,
        A.IDEOLOGICAL_CAMPAIGN: 15,
        A.ENFORCE_DISCIPLINE: 15,
    },
    GoalType.ELIMINATE_RIVALS: {
        A.LAUNCH_INVESTIGATION: 30,
        A.DENOUNCE: 25,
        A.DETAIN_SUSPECT: 25,
        A.SPREAD_RUMORS: 15,
    },
    GoalType.HUNT_FOREIGN_SPIES: {
        A.CONDUCT_SURVEILLANCE: 30,
        A.LAUNCH_INVESTIGATION: 30,
        A.DETAIN_SUSPECT: 25,
        A.DENOUNCE: 20,
    },
    # Economic planning
    GoalType.MEET_PRODUCTION_QUOTAS: {
        A.SET_PRODUCTION_QUOTA: 25,
        A.ALLOCATE_RESOURCES: 20,
        A.CURRY_FAVOR: 10,
    },
    GoalType.EXCEED_QUOTAS: {
        A.SET_PRODUCTION_QUOTA: 30,
        A.SEEK_PROTECTION: 15,
        A.CURRY_FAVOR: 15,
    },
    GoalType.EXPAND_INDUSTRIAL_OUTPUT: {
        A.ALLOCATE_RESOURCES: 25,
        A.PROPOSE_ECONOMIC_REFORM: 20,
        A.FORM_ALLIANCE: 15,
    },
    GoalType.MODERNIZE_SECTOR: {
        A.PROPOSE_ECONOMIC_REFORM: 30,
        A.ALLOCATE_RESOURCES: 15,
        A.SHARE_INTELLIGENCE: 10,
    },
    GoalType.ACQUIRE_RESOURCES: {
        A.ALLOCATE_RESOURCES: 30,
        A.SEEK_PROTECTION: 20,
        A.FORM_ALLIANCE: 15,
    },
    GoalType.PROTECT_BUDGET_ALLOCATION: {
        A.CULTIVATE_SUPPORT: 25,
        A.FORM_ALLIANCE: 20,
        A.SEEK_PROTECTION: 15,
    },
    GoalType.BUILD_ECONOMIC_NETWORK: {
        A.CULTIVATE_SUPPORT: 30,
        A.FORM_ALLIANCE: 25,
        A.SHARE_INTELLIGENCE: 15,
    },
    GoalType.ADVANCE_ECONOMIC_REFORM: {
        A.PROPOSE_ECONOMIC_REFORM: 35,
        A.FORM_ALLIANCE: 20,
        A.CULTIVATE_SUPPORT: 15,
    },
    # Military-political
    GoalType.ENSURE_PARTY_COMMAND: {
        A.IDEOLOGICAL_CAMPAIGN: 30,
        A.ENFORCE_DISCIPLINE: 25,
        A.CADRE_REVIEW: 20,
    },
    GoalType.CONDUCT_POLITICAL_WORK: {
        A.IDEOLOGICAL_CAMPAIGN: 35,
        A.CULTIVATE_SUPPORT: 15,
        A.ORGANIZE_GATHERING: 15,
    },
    GoalType.EVALUATE_OFFICER_LOYALTY: {
        A.CONDUCT_SURVEILLANCE: 30,
        A.CADRE_REVIEW: 30,
        A.SHARE_INTELLIGENCE: 20,
    },
    GoalType.PURGE_DISLOYAL: {
        A.LAUNCH_INVESTIGATION: 35,
        A.DENOUNCE: 30,
        A.DETAIN_SUSPECT: 30,
        A.DEMAND_RESIGNATION: 25,
    },
    GoalType.ENFORCE_PARTY_DISCIPLINE: {
        A.ENFORCE_DISCIPLINE: 35,
        A.CADRE_REVIEW: 25,
        A.IDEOLOGICAL_CAMPAIGN: 20,
    },
    GoalType.BUILD_COMMISSAR_NETWORK: {
        A.CULTIVATE_SUPPORT: 30,
        A.FORM_ALLIANCE: 30,
        A.SHARE_INTELLIGENCE: 20,
    },
    GoalType.ADVANCE_MILITARY_REFORM: {
        A.PROPOSE_ECONOMIC_REFORM: 25,
        A.PROPOSE_POLICY_CHANGE: 25,
        A.FORM_ALLIANCE: 20,
        A.CULTIVATE_SUPPORT: 15,
    },
    GoalType.PREVENT_MILITARY_COUP: {
        A.CONDUCT_SURVEILLANCE: 35,
        A.LAUNCH_INVESTIGATION: 30,
        A.DETAIN_SUSPECT: 30,
        A.ENFORCE_DISCIPLINE: 25,
    },
    # Party apparatus
    GoalType.CONTROL_NOMENKLATURA: {
        A.CADRE_REVIEW: 35,
        A.CURRY_FAVOR: 20,
        A.CULTIVATE_SUPPORT: 20,
    },
    GoalType.ENFORCE_PROPAGANDA_LINE: {
        A.IDEOLOGICAL_CAMPAIGN: 35,
        A.ENFORCE_DISCIPLINE: 25,
        A.DENOUNCE: 20,
    },
    GoalType.CONDUCT_UNITED_FRONT_WORK: {
        A.CULTIVATE_SUPPORT: 35,
        A.FORM_ALLIANCE: 30,
        A.ORGANIZE_GATHERING: 25,
    },
    GoalType.RUN_PARTY_SCHOOL: {
        A.IDEOLOGICAL_CAMPAIGN: 35,
        A.CADRE_REVIEW: 25,
        A.CULTIVATE_SUPPORT: 20,
    },
    GoalType.MAINTAIN_PARTY_DISCIPLINE: {
        A.ENFORCE_DISCIPLINE: 35,
        A.CADRE_REVIEW: 30,
        A.IDEOLOGICAL_CAMPAIGN: 20,
    },
    GoalType.EXPAND_PARTY_INFLUENCE: {
        A.CULTIVATE_SUPPORT: 35,
        A.ORGANIZE_GATHERING: 25,
        A.FORM_ALLIANCE: 25,
    },
    GoalType.BUILD_CADRE_NETWORK: {
        A.CULTIVATE_SUPPORT: 35,
        A.FORM_ALLIANCE: 30,
        A.SHARE_INTELLIGENCE: 20,
        A.CURRY_FAVOR: 15,
    },
    GoalType.PURGE_DEVIATIONISTS: {
        A.LAUNCH_INVESTIGATION: 35,
        A.DENOUNCE: 35,
        A.DETAIN_SUSPECT: 30,
        A.DEMAND_RESIGNATION: 25,
    },
    # State ministry
    GoalType.ACHIEVE_ADMINISTRATIVE_EXCELLENCE: {
        A.CULTIVATE_SUPPORT: 25,
        A.PROPOSE_LEGISLATION: 30,
        A.ADMINISTRATIVE_REFORM: 35,
    },
    GoalType.SECURE_BUDGET_ALLOCATION: {
        A.CULTIVATE_SUPPORT: 30,
        A.CURRY_FAVOR: 25,
        A.PROPOSE_LEGISLATION: 20,
    },
    GoalType.ADVANCE_MAJOR_PROJECT: {
        A.PROPOSE_LEGISLATION: 35,
        A.ORGANIZE_GATHERING: 25,
        A.ADMINISTRATIVE_REFORM: 30,
    },
    GoalType.COORDINATE_ACROSS_MINISTRIES: {
        A.ORGANIZE_GATHERING: 40,
        A.FORM_ALLIANCE: 30,
        A.CURRY_FAVOR: 20,
    },
    GoalType.IMPLEMENT_STATE_POLICY: {
        A.PROPOSE_LEGISLATION: 25,
        A.CULTIVATE_SUPPORT: 20,
        A.DEMAND_RESIGNATION: 20,
    },
    GoalType.AUDIT_SUBORDINATE_UNITS: {
        A.LAUNCH_INVESTIGATION: 40,
        A.DENOUNCE: 25,
        A.DEMAND_RESIGNATION: 25,
    },
    GoalType.MODERNIZE_ADMINISTRATION: {
        A.ADMINISTRATIVE_REFORM: 45,
        A.PROPOSE_LEGISLATION: 35,
        A.REORGANIZE_DEPARTMENT: 30,
    },
    GoalType.BUILD_BUREAUCRATIC_NETWORK: {
        A.CULTIVATE_SUPPORT: 50,
        A.FORM_ALLIANCE: 35,
        A.SEEK_PROTECTION: 30,
    },
}

# Flat bonus added to need urgency for actions that satisfy a pressing need
NEED_SATISFIERS: dict[NeedKind, dict[ActionType, int]] = {
    NeedKind.SECURITY: {A.SEEK_PROTECTION: 15, A.FORM_ALLIANCE: 10, A.CURRY_FAVOR: 5},
    NeedKind.POWER: {
        A.PROPOSE_POLICY_CHANGE: 10,
        A.ISSUE_DIRECTIVE: 15,
        A.BLOCK_PROMOTION: 5,
        A.CULTIVATE_SUPPORT: 10,
        A.DEMAND_RESIGNATION: 10,
        A.PROPOSE_LAW_CHANGE: 20,
    },
    NeedKind.LOYALTY: {A.FORM_ALLIANCE: 15, A.ORGANIZE_GATHERING: 10, A.SHARE_INTELLIGENCE: 10},
    NeedKind.RECOGNITION: {
        A.PROPOSE_POLICY_CHANGE: 10,
        A.CURRY_FAVOR: 10,
        A.IDEOLOGICAL_CAMPAIGN: 10,
        A.SET_NATIONAL_PRIORITY: 15,
        A.PROPOSE_LAW_CHANGE: 15,
    },
    NeedKind.STABILITY: {A.MANAGE_CRISIS: 15, A.RESPOND_TO_CRISIS: 15, A.SUPPRESS_UNREST: 10},
}

# Penalties for actions that worsen a pressing need: (urgency divisor, extra flat penalty)
NEED_HAZARDS: dict[NeedKind, dict[ActionType, tuple[int, int]]] = {
    NeedKind.SECURITY: {
        A.DENOUNCE: (1, 0),
        A.BETRAY_ALLIANCE: (1, 10),
        A.LAUNCH_INVESTIGATION: (2, 0),
    },
    NeedKind.STABILITY: {
        A.DENOUNCE: (2, 0),
        A.BETRAY_ALLIANCE: (1, 0),
    },
}

IDEOLOGUE_BONUSES: dict[ActionType, int] = {
    A.IDEOLOGICAL_CAMPAIGN: 20,
    A.ENFORCE_DISCIPLINE: 15,
    A.CADRE_REVIEW: 15,
}
DISILLUSIONED_PENALTIES: dict[ActionType, int] = {A.IDEOLOGICAL_CAMPAIGN: -10}


# =============================================================================
# Scoring Helpers
# =============================================================================


def _add(weights: dict[ActionType, int], bonuses: dict[ActionType, int]) -> None:
    for action, bonus in bonuses.items():
        if action in weights:
            weights[action] += bonus


def goal_alignment_bonus(action: ActionType, actor: Actor) -> int:
    """Sum of per-goal bonuses for an action across the actor's active goals."""
    return sum(GOAL_ALIGNMENT.get(goal.goal_type, {}).get(action, 0) for goal in actor.active_goals)


def need_satisfaction_bonus(action: ActionType, actor: Actor) -> int:
    """
    Bonus (or penalty) an action earns from the actor's unmet needs.

    Each need below 40 contributes urgency = (40 - value) / 2 plus a flat
    amount to actions that satisfy it, and subtracts urgency-scaled
    penalties from actions that would make it worse.
    """
    needs = actor.needs
    bonus = 0
    for kind, satisfiers in NEED_SATISFIERS.items():
        value = needs.value(kind)
        if value >= NEED_PRESSURE_THRESHOLD:
            continue
        urgency = (NEED_PRESSURE_THRESHOLD - value) // 2
        if action in satisfiers:
            bonus += urgency + satisfiers[action]
        hazard = NEED_HAZARDS.get(kind, {}).get(action)
        if hazard is not None:
            divisor, extra = hazard
            bonus -= urgency // divisor + extra

    if needs.ideological_commitment > TRUE_BELIEVER_NEED:
        bonus += IDEOLOGUE_BONUSES.get(action, 0)
    elif needs.ideological_commitment < DISILLUSIONED_NEED:
        bonus += DISILLUSIONED_PENALTIES.get(action, 0)
    return bonus


def party_devotion_modifier(action: ActionType, actor: Actor) -> int:
    """Zealots favour ideological and disciplinary work and shun self-enrichment."""
    traits = actor.personality
    if traits.loyal <= DEVOTION_THRESHOLD:
        return 0
    devotion = traits.loyal - 50
    modifier = 0
    if action == A.IDEOLOGICAL_CAMPAIGN:
        modifier += devotion // 3
    if action in (A.ENFORCE_DISCIPLINE, A.CADRE_REVIEW):
        modifier += devotion // 4
    if action in (A.LAUNCH_INVESTIGATION, A.CONDUCT_SURVEILLANCE):
        modifier += devotion // 5
    if action == A.SABOTAGE_PROJECT and traits.corrupt < 40:
        modifier -= devotion // 2
    return modifier


def action_motivation(actor: Actor) -> int:
    """Drive to act at all this turn."""
    traits = actor.personality
    return (
        20
        + traits.ambitious // 3
        + traits.ruthless // 4
        + traits.competent // 4
        + traits.paranoid // 5
        + actor.position * 3
    )


# =============================================================================
# Selector
# =============================================================================


@dataclass
class ActionSelector:
    """Chooses which action an eligible actor performs."""

    config: AgencyConfig = field(default_factory=AgencyConfig)

    def available_actions(self, actor: Actor, state: GameState) -> list[ActionType]:
        """Actions the actor may take, in catalog order."""
        committee = state.is_committee_member(actor.id)
        ledger = state.ledger
        stability = ledger.get(Indicator.STABILITY)
        crisis_open = {
            A.RESPOND_TO_CRISIS: stability < 50,
            A.SUPPRESS_UNREST: stability < 35,
            A.ADDRESS_SHORTAGE: (
                ledger.get(Indicator.FOOD_SUPPLY) < 40
                or ledger.get(Indicator.INDUSTRIAL_OUTPUT) < 40
            ),
            A.HANDLE_INCIDENT: ledger.get(Indicator.INTERNATIONAL_STANDING) < 40,
        }

        available = []
        for action in ActionType:
            if not can_perform(actor, action, committee_member=committee):
                continue
            if not crisis_open.get(action, True) and not self._track_grants(actor, action):
                continue
            available.append(action)
        return available

    @staticmethod
    def _track_grants(actor: Actor, action: ActionType) -> bool:
        """Track-owned actions that happen to share a reactive name stay open."""
        return action.required_track is not None and actor.track == action.required_track

    def compute_weights(self, actor: Actor, state: GameState) -> dict[ActionType, int]:
        """Final selection weight for every available action."""
        traits = actor.personality
        ledger = state.ledger
        base = self.config.base_action_weight
        weights = {action: base for action in self.available_actions(actor, state)}

        if traits.ambitious > TRAIT_THRESHOLD:
            _add(weights, AMBITIOUS_BONUSES)
        if traits.ruthless > TRAIT_THRESHOLD:
            _add(weights, RUTHLESS_BONUSES)
        if traits.competent > TRAIT_THRESHOLD:
            _add(weights, COMPETENT_BONUSES)
        if traits.paranoid > TRAIT_THRESHOLD:
            _add(weights, PARANOID_BONUSES)
        if traits.loyal > TRAIT_THRESHOLD:
            _add(weights, LOYAL_BONUSES)

        if actor.position >= 5:
            _add(weights, SENIOR_BONUSES)
        if actor.is_top_leadership and state.is_committee_member(actor.id):
            _add(weights, {A.PROPOSE_LAW_CHANGE: COMMITTEE_LAW_BONUS})
        if actor.position <= 3:
            _add(weights, JUNIOR_BONUSES)

        stability = ledger.get(Indicator.STABILITY)
        if stability < 40:
            _add(weights, UNSTABLE_BONUSES)
        if ledger.get(Indicator.FOOD_SUPPLY) < 30 or ledger.get(Indicator.INDUSTRIAL_OUTPUT) < 30:
            _add(weights, SHORTAGE_BONUSES)
        if ledger.get(Indicator.INTERNATIONAL_STANDING) < 40:
            _add(weights, DIPLOMATIC_BONUSES)
        if stability > 60:
            _add(weights, STABLE_BONUSES)

        for action in weights:
            weights[action] += (
                goal_alignment_bonus(action, actor)
                + need_satisfaction_bonus(action, actor)
                + party_devotion_modifier(action, actor)
            )
        if traits.loyal > TRAIT_THRESHOLD and A.BETRAY_ALLIANCE in weights:
            weights[A.BETRAY_ALLIANCE] = 0
        return weights

    def select_action_type(
        self, actor: Actor, state: GameState, rng: random.Random
    ) -> ActionType:
        """Weighted draw over positive weights, spreading rumours as a fallback."""
        weights = self.compute_weights(actor, state)
        action = weighted_draw(weights, rng)
        if action is None:
            logger.debug("%s has no positive action weight; falling back", actor.id)
            return FALLBACK_ACTION
        return action

    def is_off_cooldown(self, actor: Actor, turn: int) -> bool:
        if actor.last_action_turn is None:
            return True
        return turn - actor.last_action_turn >= self.config.actor_cooldown

    def action_chance(self, actor: Actor) -> float:
        return self.config.base_action_chance + action_motivation(actor) / 200

    def should_act(self, actor: Actor, state: GameState, rng: random.Random) -> bool:
        """Per-actor cooldown and motivation gate."""
        if not self.is_off_cooldown(actor, state.turn):
            return False
        return roll_chance(self.action_chance(actor), rng)
