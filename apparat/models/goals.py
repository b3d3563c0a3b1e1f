"""
Goal models for political actors.

Goals are persistent objectives that bias action selection. An actor holds
at most three active goals at once.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

MAX_ACTIVE_GOALS = 3
FRUSTRATION_THRESHOLD = 50


class GoalTheme(str, Enum):
    """Thematic grouping of goal types."""

    CAREER = "career"
    RELATIONSHIP = "relationship"
    POWER = "power"
    IDEOLOGICAL = "ideological"
    PARTY_DEVOTION = "party_devotion"
    ESPIONAGE = "espionage"
    SURVIVAL = "survival"
    SECURITY = "security"
    ECONOMIC = "economic"
    MILITARY_POLITICAL = "military_political"
    DIPLOMATIC = "diplomatic"
    PARTY_APPARATUS = "party_apparatus"
    STATE_MINISTRY = "state_ministry"


class GoalType(str, Enum):
    """Every kind of goal an actor can pursue."""

    # Career
    SEEK_PROMOTION = "seek_promotion"
    BECOME_TRACK_HEAD = "become_track_head"
    JOIN_POLITBURO = "join_politburo"
    PROTECT_POSITION = "protect_position"

    # Relationship
    DESTROY_RIVAL = "destroy_rival"
    ELEVATE_ALLY = "elevate_ally"
    AVENGE_BETRAYAL = "avenge_betrayal"
    REPAY_DEBT = "repay_debt"

    # Power
    BUILD_FACTION = "build_faction"
    ACCUMULATE_WEALTH = "accumulate_wealth"
    EXPAND_INFLUENCE = "expand_influence"

    # Ideological
    IMPLEMENT_REFORM = "implement_reform"
    MAINTAIN_ORTHODOXY = "maintain_orthodoxy"
    PURGE_ENEMIES = "purge_enemies"

    # Party devotion
    SERVE_THE_PARTY = "serve_the_party"
    DEFEND_PARTY_ORTHODOXY = "defend_party_orthodoxy"
    ROOT_OUT_TRAITORS = "root_out_traitors"
    STRENGTHEN_THE_STATE = "strengthen_the_state"

    # Espionage
    SPY_FOR_FOREIGN_POWER = "spy_for_foreign_power"
    RECRUIT_ASSETS = "recruit_assets"
    SABOTAGE_FROM_WITHIN = "sabotage_from_within"
    AVOID_DETECTION = "avoid_detection"

    # Survival
    AVOID_PURGE = "avoid_purge"
    CLEAR_NAME = "clear_name"
    ESCAPE_DETENTION = "escape_detention"
    FIND_PROTECTOR = "find_protector"

    # Security services
    INVESTIGATE_CORRUPTION = "investigate_corruption"
    EXPAND_SURVEILLANCE = "expand_surveillance"
    CONDUCT_PURGE = "conduct_purge"
    BUILD_DOSSIERS = "build_dossiers"
    PROTECT_PATRON = "protect_patron"
    PROTECT_REGIME = "protect_regime"
    ELIMINATE_RIVALS = "eliminate_rivals"
    HUNT_FOREIGN_SPIES = "hunt_foreign_spies"

    # Economic planning
    MEET_PRODUCTION_QUOTAS = "meet_production_quotas"
    EXCEED_QUOTAS = "exceed_quotas"
    EXPAND_INDUSTRIAL_OUTPUT = "expand_industrial_output"
    MODERNIZE_SECTOR = "modernize_sector"
    ACQUIRE_RESOURCES = "acquire_resources"
    PROTECT_BUDGET_ALLOCATION = "protect_budget_allocation"
    BUILD_ECONOMIC_NETWORK = "build_economic_network"
    ADVANCE_ECONOMIC_REFORM = "advance_economic_reform"

    # Military-political
    ENSURE_PARTY_COMMAND = "ensure_party_command"
    CONDUCT_POLITICAL_WORK = "conduct_political_work"
    EVALUATE_OFFICER_LOYALTY = "evaluate_officer_loyalty"
    PURGE_DISLOYAL = "purge_disloyal"
    ENFORCE_PARTY_DISCIPLINE = "enforce_party_discipline"
    BUILD_COMMISSAR_NETWORK = "build_commissar_network"
    ADVANCE_MILITARY_REFORM = "advance_military_reform"
    PREVENT_MILITARY_COUP = "prevent_military_coup"

    # Diplomatic
    IMPROVE_ALLY_RELATIONS = "improve_ally_relations"
    CONTAIN_CAPITALIST_THREAT = "contain_capitalist_threat"
    EXPAND_TRADE_NETWORK = "expand_trade_network"
    DEFUSE_INTERNATIONAL_CRISIS = "defuse_international_crisis"
    ADVANCE_IDEOLOGICAL_GOALS = "advance_ideological_goals"
    PROPOSE_FOREIGN_POLICY = "propose_foreign_policy"
    NEGOTIATE_TREATY = "negotiate_treaty"

    # Party apparatus
    CONTROL_NOMENKLATURA = "control_nomenklatura"
    ENFORCE_PROPAGANDA_LINE = "enforce_propaganda_line"
    CONDUCT_UNITED_FRONT_WORK = "conduct_united_front_work"
    RUN_PARTY_SCHOOL = "run_party_school"
    MAINTAIN_PARTY_DISCIPLINE = "maintain_party_discipline"
    EXPAND_PARTY_INFLUENCE = "expand_party_influence"
    BUILD_CADRE_NETWORK = "build_cadre_network"
    PURGE_DEVIATIONISTS = "purge_deviationists"

    # State ministry
    ACHIEVE_ADMINISTRATIVE_EXCELLENCE = "achieve_administrative_excellence"
    SECURE_BUDGET_ALLOCATION = "secure_budget_allocation"
    ADVANCE_MAJOR_PROJECT = "advance_major_project"
    COORDINATE_ACROSS_MINISTRIES = "coordinate_across_ministries"
    IMPLEMENT_STATE_POLICY = "implement_state_policy"
    AUDIT_SUBORDINATE_UNITS = "audit_subordinate_units"
    MODERNIZE_ADMINISTRATION = "modernize_administration"
    BUILD_BUREAUCRATIC_NETWORK = "build_bureaucratic_network"

    @property
    def theme(self) -> GoalTheme:
        return _GOAL_THEMES[self]

    @property
    def requires_target(self) -> bool:
        """Whether this goal is aimed at one specific actor."""
        return self in _TARGETED_GOALS

    @property
    def is_party_devotion(self) -> bool:
        return self.theme == GoalTheme.PARTY_DEVOTION

    @property
    def is_espionage(self) -> bool:
        return self.theme == GoalTheme.ESPIONAGE

    @property
    def is_survival(self) -> bool:
        return self.theme == GoalTheme.SURVIVAL


_TARGETED_GOALS = frozenset(
    {
        GoalType.DESTROY_RIVAL,
        GoalType.ELEVATE_ALLY,
        GoalType.AVENGE_BETRAYAL,
        GoalType.REPAY_DEBT,
        GoalType.ELIMINATE_RIVALS,
        GoalType.PROTECT_PATRON,
        GoalType.BUILD_DOSSIERS,
    }
)


def _themed(theme: GoalTheme, *goal_types: GoalType) -> dict[GoalType, GoalTheme]:
    return {goal_type: theme for goal_type in goal_types}


_GOAL_THEMES: dict[GoalType, GoalTheme] = {
    **_themed(
        GoalTheme.CAREER,
        GoalType.SEEK_PROMOTION,
        GoalType.BECOME_TRACK_HEAD,
        GoalType.JOIN_POLITBURO,
        GoalType.PROTECT_POSITION,
    ),
    **_themed(
        GoalTheme.RELATIONSHIP,
        GoalType.DESTROY_RIVAL,
        GoalType.ELEVATE_ALLY,
        GoalType.AVENGE_BETRAYAL,
        GoalType.REPAY_DEBT,
    ),
    **_themed(
        GoalTheme.POWER,
        GoalType.BUILD_FACTION,
        GoalType.ACCUMULATE_WEALTH,
        GoalType.EXPAND_INFLUENCE,
    ),
    **_themed(
        GoalTheme.IDEOLOGICAL,
        GoalType.IMPLEMENT_REFORM,
        GoalType.MAINTAIN_ORTHODOXY,
        GoalType.PURGE_ENEMIES,
    ),
    **_themed(
        GoalTheme.PARTY_DEVOTION,
        GoalType.SERVE_THE_PARTY,
        GoalType.DEFEND_PARTY_ORTHODOXY,
        GoalType.ROOT_OUT_TRAITORS,
        GoalType.STRENGTHEN_THE_STATE,
    ),
    **_themed(
        GoalTheme.ESPIONAGE,
        GoalType.SPY_FOR_FOREIGN_POWER,
        GoalType.RECRUIT_ASSETS,
        GoalType.SABOTAGE_FROM_WITHIN,
        GoalType.AVOID_DETECTION,
    ),
    **_themed(
        GoalTheme.SURVIVAL,
        GoalType.AVOID_PURGE,
        GoalType.CLEAR_NAME,
        GoalType.ESCAPE_DETENTION,
        GoalType.FIND_PROTECTOR,
    ),
    **_themed(
        GoalTheme.SECURITY,
        GoalType.INVESTIGATE_CORRUPTION,
        GoalType.EXPAND_SURVEILLANCE,
        GoalType.CONDUCT_PURGE,
        GoalType.BUILD_DOSSIERS,
        GoalType.PROTECT_PATRON,
        GoalType.PROTECT_REGIME,
        GoalType.ELIMINATE_RIVALS,
        GoalType.HUNT_FOREIGN_SPIES,
    ),
    **_themed(
        GoalTheme.ECONOMIC,
        GoalType.MEET_PRODUCTION_QUOTAS,
        GoalType.EXCEED_QUOTAS,
        GoalType.EXPAND_INDUSTRIAL_OUTPUT,
        GoalType.MODERNIZE_SECTOR,
        GoalType.ACQUIRE_RESOURCES,
        GoalType.PROTECT_BUDGET_ALLOCATION,
        GoalType.BUILD_ECONOMIC_NETWORK,
        GoalType.ADVANCE_ECONOMIC_REFORM,
    ),
    **_themed(
        GoalTheme.MILITARY_POLITICAL,
        GoalType.ENSURE_PARTY_COMMAND,
        GoalType.CONDUCT_POLITICAL_WORK,
        GoalType.EVALUATE_OFFICER_LOYALTY,
        GoalType.PURGE_DISLOYAL,
        GoalType.ENFORCE_PARTY_DISCIPLINE,
        GoalType.BUILD_COMMISSAR_NETWORK,
        GoalType.ADVANCE_MILITARY_REFORM,
        GoalType.PREVENT_MILITARY_COUP,
    ),
    **_themed(
        GoalTheme.DIPLOMATIC,
        GoalType.IMPROVE_ALLY_RELATIONS,
        GoalType.CONTAIN_CAPITALIST_THREAT,
        GoalType.EXPAND_TRADE_NETWORK,
        GoalType.DEFUSE_INTERNATIONAL_CRISIS,
        GoalType.ADVANCE_IDEOLOGICAL_GOALS,
        GoalType.PROPOSE_FOREIGN_POLICY,
        GoalType.NEGOTIATE_TREATY,
    ),
    **_themed(
        GoalTheme.PARTY_APPARATUS,
        GoalType.CONTROL_NOMENKLATURA,
        GoalType.ENFORCE_PROPAGANDA_LINE,
        GoalType.CONDUCT_UNITED_FRONT_WORK,
        GoalType.RUN_PARTY_SCHOOL,
        GoalType.MAINTAIN_PARTY_DISCIPLINE,
        GoalType.EXPAND_PARTY_INFLUENCE,
        GoalType.BUILD_CADRE_NETWORK,
        GoalType.PURGE_DEVIATIONISTS,
    ),
    **_themed(
        GoalTheme.STATE_MINISTRY,
        GoalType.ACHIEVE_ADMINISTRATIVE_EXCELLENCE,
        GoalType.SECURE_BUDGET_ALLOCATION,
        GoalType.ADVANCE_MAJOR_PROJECT,
        GoalType.COORDINATE_ACROSS_MINISTRIES,
        GoalType.IMPLEMENT_STATE_POLICY,
        GoalType.AUDIT_SUBORDINATE_UNITS,
        GoalType.MODERNIZE_ADMINISTRATION,
        GoalType.BUILD_BUREAUCRATIC_NETWORK,
    ),
}


class Goal(BaseModel):
    """
    A persistent behavioural objective.

    Progress runs 0-100. Reaching 100 deactivates the goal for good.
    Frustration accumulates on failed attempts but never deactivates a goal.
    """

    goal_type: GoalType

    target_id: str | None = None
    """Actor this goal is aimed at, for targeted goal types."""

    priority: Annotated[int, Field(ge=1, le=100)] = 50
    progress: Annotated[int, Field(ge=0, le=100)] = 0
    active: bool = True

    created_turn: int = 0
    deadline_turn: int | None = None

    attempts: int = 0
    last_attempt_turn: int | None = None
    frustration: Annotated[int, Field(ge=0, le=100)] = 0

    @property
    def is_frustrated(self) -> bool:
        return self.frustration >= FRUSTRATION_THRESHOLD

    @property
    def is_complete(self) -> bool:
        return self.progress >= 100

    def effective_priority(self, turn: int) -> int:
        """Priority adjusted for deadline pressure and frustration."""
        priority = self.priority
        if self.deadline_turn is not None:
            remaining = self.deadline_turn - turn
            if remaining <= 3:
                priority += 20
            elif remaining <= 5:
                priority += 10
        priority += self.frustration // 5
        return min(100, priority)

    def advance(self, amount: int, turn: int) -> None:
        """Record a successful attempt. Completing the goal deactivates it."""
        if not self.active or amount <= 0:
            return
        self.progress = min(100, self.progress + amount)
        self.attempts += 1
        self.last_attempt_turn = turn
        if self.progress >= 100:
            self.active = False

    def frustrate(self, amount: int, turn: int) -> None:
        """Record a failed attempt."""
        if not self.active:
            return
        self.frustration = max(0, min(100, self.frustration + amount))
        self.attempts += 1
        self.last_attempt_turn = turn


# =============================================================================
# Factory Functions
# =============================================================================


def create_goal(
    goal_type: GoalType,
    *,
    priority: int = 50,
    turn: int = 0,
    target_id: str | None = None,
    deadline_turn: int | None = None,
) -> Goal:
    """
    Create a new active goal.

    Args:
        goal_type: What the actor is trying to achieve
        priority: Importance 1-100 (clamped)
        turn: Turn the goal was adopted
        target_id: Actor the goal is aimed at, if any
        deadline_turn: Optional turn by which the goal should be met

    Returns:
        A new Goal instance
    """
    return Goal(
        goal_type=goal_type,
        priority=max(1, min(100, priority)),
        created_turn=turn,
        target_id=target_id,
        deadline_turn=deadline_turn,
    )
