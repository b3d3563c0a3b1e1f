"""
Effect execution for autonomous actions.

Each action type maps to a pure descriptor that turns an EffectContext
into a list of mutations. The executor applies them in one dispatch loop,
then records history, memories, goal and need changes, espionage
suspicion and, when the player would notice, a narrative event.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from apparat.db.interfaces import ActionPresenter, LawRegistry
from apparat.models.actions import CONTESTED_ACTIONS, ActionType, can_perform
from apparat.models.actor import Actor, ActorStatus, Interaction
from apparat.models.config import AgencyConfig, VisibilityConfig
from apparat.models.event import (
    EventCategory,
    EventPriority,
    NarrativeEvent,
    ResponseOption,
)
from apparat.models.ledger import Indicator
from apparat.models.memory import MemoryKind, create_memory
from apparat.models.relationship import AllianceBreakReason
from apparat.models.state import GameState
from apparat.services.behavior import BehaviorService
from apparat.services.espionage import EspionageService
from apparat.services.laws import select_beneficial_law_change
from apparat.services.presentation import PlainTextPresenter
from apparat.services.relationships import RelationshipService
from apparat.skills.dice import roll_chance, roll_range

logger = logging.getLogger(__name__)

A = ActionType


# =============================================================================
# Mutations
# =============================================================================


class EdgeTransitionKind(str, Enum):
    """Structural changes to a relationship edge."""

    FORM_ALLIANCE = "form_alliance"
    BREAK_ALLIANCE = "break_alliance"
    RECORD_BETRAYAL = "record_betrayal"
    DECLARE_RIVALRY = "declare_rivalry"
    BECOME_CLIENT = "become_client"
    BECOME_PATRON = "become_patron"


class EdgeDelta(BaseModel):
    """Shift one numeric attribute of the edge source -> target."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    field: str
    delta: int


class EdgeTransition(BaseModel):
    """Structural change to the edge source -> target."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    kind: EdgeTransitionKind
    strength: int = 0
    severity: int = 0
    reason: AllianceBreakReason = AllianceBreakReason.MUTUAL_AGREEMENT


class ActorDelta(BaseModel):
    """Shift one personal gauge of an actor."""

    model_config = ConfigDict(frozen=True)

    actor_id: str
    field: str
    delta: int


class StatusChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    actor_id: str
    status: ActorStatus
    details: str | None = None


class LedgerDelta(BaseModel):
    model_config = ConfigDict(frozen=True)

    indicator: Indicator
    delta: int


class LawProposal(BaseModel):
    """Submit the sponsor's preferred law change to the registry."""

    model_config = ConfigDict(frozen=True)

    sponsor_id: str


Mutation = Union[EdgeDelta, EdgeTransition, ActorDelta, StatusChange, LedgerDelta, LawProposal]


@dataclass
class EffectContext:
    """Everything an effect descriptor may read."""

    actor: Actor
    target: Actor
    state: GameState
    rng: random.Random

    @property
    def turn(self) -> int:
        return self.state.turn

    def forward(self, field_name: str, delta: int) -> EdgeDelta:
        """Change the actor's view of the target."""
        return EdgeDelta(
            source_id=self.actor.id, target_id=self.target.id, field=field_name, delta=delta
        )

    def reverse(self, field_name: str, delta: int) -> EdgeDelta:
        """Change the target's view of the actor."""
        return EdgeDelta(
            source_id=self.target.id, target_id=self.actor.id, field=field_name, delta=delta
        )

    def on_target(self, field_name: str, delta: int) -> ActorDelta:
        return ActorDelta(actor_id=self.target.id, field=field_name, delta=delta)

    def ledger(self, indicator: Indicator, low: int, high: int) -> LedgerDelta:
        return LedgerDelta(indicator=indicator, delta=roll_range(low, high, self.rng))

    def transition(
        self, kind: EdgeTransitionKind, *, reverse: bool = False, **values: object
    ) -> EdgeTransition:
        source, target = (self.target, self.actor) if reverse else (self.actor, self.target)
        return EdgeTransition(source_id=source.id, target_id=target.id, kind=kind, **values)

    def chance(self, probability: float) -> bool:
        return roll_chance(probability, self.rng)


EffectDescriptor = Callable[[EffectContext], list[Mutation]]


# =============================================================================
# Effect Descriptors
# =============================================================================


def _form_alliance(ctx: EffectContext) -> list[Mutation]:
    strength = 40 + roll_range(0, 20, ctx.rng)
    return [
        ctx.transition(EdgeTransitionKind.FORM_ALLIANCE, strength=strength),
        ctx.transition(EdgeTransitionKind.FORM_ALLIANCE, reverse=True, strength=strength),
    ]


def _betray_alliance(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.transition(EdgeTransitionKind.BREAK_ALLIANCE, reason=AllianceBreakReason.BETRAYAL),
        ctx.transition(EdgeTransitionKind.RECORD_BETRAYAL, reverse=True, severity=40),
    ]


def _denounce(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.transition(EdgeTransitionKind.DECLARE_RIVALRY),
        ctx.on_target("fear_level", 15),
    ]


def _block_promotion(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("disposition", -20), ctx.reverse("grudge", 20)]


def _spread_rumors(ctx: EffectContext) -> list[Mutation]:
    return [ctx.on_target("disposition", -10), ctx.forward("disposition", -10)]


def _seek_protection(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.transition(EdgeTransitionKind.BECOME_CLIENT),
        ctx.transition(EdgeTransitionKind.BECOME_PATRON, reverse=True),
        ctx.reverse("disposition", 10),
    ]


def _cultivate_support(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("disposition", 15),
        ctx.forward("trust", 10),
        ctx.reverse("gratitude", 10),
    ]


def _share_intelligence(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 15),
        ctx.forward("disposition", 10),
        ctx.reverse("gratitude", 15),
    ]


def _organize_gathering(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("disposition", 5), ctx.forward("trust", 5)]


def _make_implicit_threat(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.reverse("fear", 25),
        ctx.reverse("disposition", -15),
        ctx.on_target("fear_level", 10),
    ]


def _curry_favor(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("disposition", 10), ctx.reverse("disposition", 5)]


def _sabotage_project(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.on_target("disposition", -15),
        ctx.forward("disposition", -20),
        ctx.reverse("grudge", 30),
    ]


def _negotiate_treaty(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 10),
        ctx.forward("disposition", 5),
        ctx.ledger(Indicator.INTERNATIONAL_STANDING, 1, 3),
    ]


def _diplomatic_outreach(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("disposition", 8),
        ctx.ledger(Indicator.INTERNATIONAL_STANDING, 1, 2),
    ]


def _recall_ambassador(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 5),
        ctx.ledger(Indicator.INTERNATIONAL_STANDING, -3, -1),
    ]


def _set_production_quota(ctx: EffectContext) -> list[Mutation]:
    resented = roll_range(1, 100, ctx.rng) < 50
    return [
        ctx.reverse("disposition", -10 if resented else 5),
        ctx.ledger(Indicator.INDUSTRIAL_OUTPUT, -2, 3),
    ]


def _allocate_resources(ctx: EffectContext) -> list[Mutation]:
    return [ctx.reverse("gratitude", 10), ctx.forward("disposition", 5)]


def _propose_economic_reform(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.forward("disposition", 5)]
    if ctx.actor.personality.competent > 50:
        mutations.append(ctx.reverse("disposition", 5))
    return mutations


def _launch_investigation(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.reverse("fear", 30),
        ctx.reverse("disposition", -25),
        ctx.on_target("fear_level", 20),
        ctx.on_target("disposition", -10),
    ]


def _conduct_surveillance(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.forward("trust", 5)]
    if ctx.chance(0.3):
        mutations += [ctx.reverse("fear", 15), ctx.reverse("disposition", -10)]
    return mutations


def _detain_suspect(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.reverse("fear", 50),
        ctx.reverse("disposition", -40),
        ctx.reverse("grudge", 50),
        ctx.on_target("fear_level", 40),
        StatusChange(
            actor_id=ctx.target.id,
            status=ActorStatus.DETAINED,
            details=f"Detained for questioning by {ctx.actor.name}",
        ),
    ]


def _propose_legislation(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("disposition", 5), ctx.reverse("disposition", 3)]


def _administrative_reform(ctx: EffectContext) -> list[Mutation]:
    if ctx.chance(0.4):
        return [ctx.reverse("disposition", -15), ctx.reverse("grudge", 10)]
    return [ctx.reverse("disposition", 5)]


def _manage_crisis(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 10),
        ctx.forward("disposition", 8),
        ctx.reverse("trust", 8),
        ctx.ledger(Indicator.STABILITY, 1, 3),
    ]


def _ideological_campaign(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.reverse("fear", 10)]
    if ctx.target.personality.loyal < 50:
        mutations.append(ctx.reverse("disposition", -10))
    mutations.append(ctx.ledger(Indicator.ELITE_LOYALTY, 1, 3))
    return mutations


def _cadre_review(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.reverse("fear", 15)]
    if ctx.actor.personality.ruthless > 50:
        mutations.append(ctx.reverse("disposition", -10))
    return mutations


def _enforce_discipline(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.reverse("fear", 25),
        ctx.reverse("disposition", -20),
        ctx.reverse("grudge", 20),
        ctx.on_target("fear_level", 15),
    ]


def _inspect_troop_loyalty(ctx: EffectContext) -> list[Mutation]:
    return [ctx.reverse("fear", 10), ctx.ledger(Indicator.MILITARY_LOYALTY, 0, 2)]


def _political_indoctrination(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("trust", 5), ctx.ledger(Indicator.ELITE_LOYALTY, 1, 2)]


def _vet_officers(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.reverse("fear", 15)]
    if ctx.target.personality.loyal < 60:
        mutations.append(ctx.reverse("disposition", -10))
    return mutations


def _propose_policy_change(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.forward("disposition", 5)]
    if ctx.actor.personality.competent > 60:
        mutations.append(ctx.reverse("disposition", 8))
    return mutations


def _call_emergency_meeting(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("trust", 5), ctx.reverse("disposition", 3)]


def _issue_directive(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [ctx.reverse("fear", 5)]
    if ctx.chance(0.3):
        mutations.append(ctx.reverse("disposition", -5))
    return mutations


def _demand_resignation(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.reverse("fear", 40),
        ctx.reverse("disposition", -50),
        ctx.reverse("grudge", 60),
        ctx.on_target("fear_level", 30),
    ]


def _reorganize_department(ctx: EffectContext) -> list[Mutation]:
    if ctx.chance(0.5):
        return [ctx.reverse("disposition", -15), ctx.reverse("grudge", 15)]
    return [ctx.reverse("gratitude", 10)]


def _set_national_priority(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("trust", 10), ctx.forward("disposition", 5)]


def _propose_law_change(ctx: EffectContext) -> list[Mutation]:
    return [ctx.forward("trust", 5), LawProposal(sponsor_id=ctx.actor.id)]


def _respond_to_crisis(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 15),
        ctx.forward("disposition", 10),
        ctx.reverse("trust", 10),
        ctx.ledger(Indicator.STABILITY, 2, 5),
    ]


def _address_shortage(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 10),
        ctx.reverse("gratitude", 10),
        ctx.ledger(Indicator.FOOD_SUPPLY, 1, 4),
        ctx.ledger(Indicator.INDUSTRIAL_OUTPUT, 1, 3),
    ]


def _handle_incident(ctx: EffectContext) -> list[Mutation]:
    return [
        ctx.forward("trust", 10),
        ctx.forward("disposition", 5),
        ctx.ledger(Indicator.INTERNATIONAL_STANDING, -1, 3),
    ]


def _suppress_unrest(ctx: EffectContext) -> list[Mutation]:
    mutations: list[Mutation] = [
        ctx.reverse("trust", 5),
        ctx.ledger(Indicator.STABILITY, 3, 6),
    ]
    if ctx.actor.personality.ruthless > 60:
        mutations.append(ctx.ledger(Indicator.ELITE_LOYALTY, -2, 0))
    return mutations


ACTION_EFFECTS: dict[ActionType, EffectDescriptor] = {
    A.FORM_ALLIANCE: _form_alliance,
    A.BETRAY_ALLIANCE: _betray_alliance,
    A.DENOUNCE: _denounce,
    A.BLOCK_PROMOTION: _block_promotion,
    A.SPREAD_RUMORS: _spread_rumors,
    A.SEEK_PROTECTION: _seek_protection,
    A.CULTIVATE_SUPPORT: _cultivate_support,
    A.SHARE_INTELLIGENCE: _share_intelligence,
    A.ORGANIZE_GATHERING: _organize_gathering,
    A.MAKE_IMPLICIT_THREAT: _make_implicit_threat,
    A.CURRY_FAVOR: _curry_favor,
    A.SABOTAGE_PROJECT: _sabotage_project,
    A.NEGOTIATE_TREATY: _negotiate_treaty,
    A.DIPLOMATIC_OUTREACH: _diplomatic_outreach,
    A.RECALL_AMBASSADOR: _recall_ambassador,
    A.SET_PRODUCTION_QUOTA: _set_production_quota,
    A.ALLOCATE_RESOURCES: _allocate_resources,
    A.PROPOSE_ECONOMIC_REFORM: _propose_economic_reform,
    A.LAUNCH_INVESTIGATION: _launch_investigation,
    A.CONDUCT_SURVEILLANCE: _conduct_surveillance,
    A.DETAIN_SUSPECT: _detain_suspect,
    A.PROPOSE_LEGISLATION: _propose_legislation,
    A.ADMINISTRATIVE_REFORM: _administrative_reform,
    A.MANAGE_CRISIS: _manage_crisis,
    A.IDEOLOGICAL_CAMPAIGN: _ideological_campaign,
    A.CADRE_REVIEW: _cadre_review,
    A.ENFORCE_DISCIPLINE: _enforce_discipline,
    A.INSPECT_TROOP_LOYALTY: _inspect_troop_loyalty,
    A.POLITICAL_INDOCTRINATION: _political_indoctrination,
    A.VET_OFFICERS: _vet_officers,
    A.PROPOSE_POLICY_CHANGE: _propose_policy_change,
    A.CALL_EMERGENCY_MEETING: _call_emergency_meeting,
    A.ISSUE_DIRECTIVE: _issue_directive,
    A.DEMAND_RESIGNATION: _demand_resignation,
    A.REORGANIZE_DEPARTMENT: _reorganize_department,
    A.SET_NATIONAL_PRIORITY: _set_national_priority,
    A.PROPOSE_LAW_CHANGE: _propose_law_change,
    A.RESPOND_TO_CRISIS: _respond_to_crisis,
    A.ADDRESS_SHORTAGE: _address_shortage,
    A.HANDLE_INCIDENT: _handle_incident,
    A.SUPPRESS_UNREST: _suppress_unrest,
}


# =============================================================================
# Memory Records
# =============================================================================


@dataclass(frozen=True)
class MemoryRecord:
    """One memory an action leaves behind."""

    on_target: bool
    kind: MemoryKind
    sentiment: int
    severity_bonus: int = 0
    fixed_severity: int | None = None

    def severity_for(self, action: ActionType) -> int:
        if self.fixed_severity is not None:
            return self.fixed_severity
        return action.severity + self.severity_bonus


MEMORY_RECORDS: dict[ActionType, tuple[MemoryRecord, ...]] = {
    A.LAUNCH_INVESTIGATION: (
        MemoryRecord(False, MemoryKind.INVESTIGATED_OTHER, 0),
        MemoryRecord(True, MemoryKind.WAS_INVESTIGATED, -70, severity_bonus=20),
    ),
    A.FORM_ALLIANCE: (
        MemoryRecord(False, MemoryKind.ALLIANCE_FORMED, 40),
        MemoryRecord(True, MemoryKind.ALLIANCE_FORMED, 40),
    ),
    A.DENOUNCE: (
        MemoryRecord(False, MemoryKind.REPORTED_TRAITOR, 0),
        MemoryRecord(True, MemoryKind.PUBLIC_HUMILIATION, -80, severity_bonus=20),
    ),
    A.BETRAY_ALLIANCE: (
        MemoryRecord(False, MemoryKind.ALLIANCE_BROKEN, 0),
        MemoryRecord(True, MemoryKind.ALLIANCE_BROKEN, -90, severity_bonus=30),
    ),
    A.SHARE_INTELLIGENCE: (
        MemoryRecord(False, MemoryKind.SECRET_SHARED, 30),
        MemoryRecord(True, MemoryKind.SECRET_SHARED, 35),
    ),
    A.MAKE_IMPLICIT_THREAT: (
        MemoryRecord(True, MemoryKind.THREAT_RECEIVED, -50),
        MemoryRecord(False, MemoryKind.THREAT_ISSUED, 0),
    ),
    A.DETAIN_SUSPECT: (
        MemoryRecord(True, MemoryKind.WAS_DETAINED, -90, fixed_severity=90),
        MemoryRecord(False, MemoryKind.DETAINED_OTHER, 0, fixed_severity=70),
    ),
    A.BLOCK_PROMOTION: (
        MemoryRecord(True, MemoryKind.PROMOTION_BLOCKED, -60),
        MemoryRecord(False, MemoryKind.BLOCKED_PROMOTION, 0),
    ),
    A.ISSUE_DIRECTIVE: (
        MemoryRecord(True, MemoryKind.RECEIVED_DIRECTIVE, -10, fixed_severity=40),
    ),
}


# =============================================================================
# Outcomes
# =============================================================================

FAILURE_GRUDGE = 10
FAILURE_DISPOSITION = -10
MIN_SUCCESS_CHANCE = 0.2
MAX_SUCCESS_CHANCE = 0.95


class SkipReason(str, Enum):
    """Why an action was not executed."""

    ACTOR_INACTIVE = "actor_inactive"
    NO_TARGET = "no_target"
    TARGET_INACTIVE = "target_inactive"
    SELF_TARGET = "self_target"
    NOT_PERMITTED = "not_permitted"
    ALLIANCE_TOO_YOUNG = "alliance_too_young"


class ActionOutcome(BaseModel):
    """Result of one attempted autonomous action."""

    actor_id: str
    action: ActionType
    target_id: str | None = None
    executed: bool = False
    success: bool = False
    skip_reason: SkipReason | None = None
    mutations: list[Mutation] = Field(default_factory=list)
    spy_captured: bool = False
    event: NarrativeEvent | None = None


def contested_success_chance(actor: Actor, target: Actor) -> float:
    """Rank and competence decide contested actions."""
    chance = (
        0.5
        + (actor.position - target.position) * 0.1
        + (actor.personality.competent - 50) / 200
    )
    return max(MIN_SUCCESS_CHANCE, min(MAX_SUCCESS_CHANCE, chance))


def intel_responses() -> list[ResponseOption]:
    return [
        ResponseOption(key="note", label="Note it and move on"),
        ResponseOption(
            key="investigate",
            label="Have your people look into it",
            effects={Indicator.NETWORK: -2},
            sets_flag="investigating_intel",
        ),
    ]


# =============================================================================
# Executor
# =============================================================================


@dataclass
class EffectExecutor:
    """Applies an autonomous action and all of its consequences."""

    config: AgencyConfig = field(default_factory=AgencyConfig)
    visibility: VisibilityConfig = field(default_factory=VisibilityConfig)
    relationships: RelationshipService = field(default_factory=RelationshipService)
    behavior: BehaviorService = field(default_factory=BehaviorService)
    espionage: EspionageService = field(default_factory=EspionageService)
    presenter: ActionPresenter = field(default_factory=PlainTextPresenter)
    registry: LawRegistry | None = None

    def check(
        self, actor: Actor, action: ActionType, target: Actor | None, state: GameState
    ) -> SkipReason | None:
        """Validate an action before it touches the state."""
        if not actor.is_active:
            return SkipReason.ACTOR_INACTIVE
        if target is None:
            return SkipReason.NO_TARGET
        if target.id == actor.id:
            return SkipReason.SELF_TARGET
        if not target.is_active:
            return SkipReason.TARGET_INACTIVE
        if not can_perform(actor, action, committee_member=state.is_committee_member(actor.id)):
            return SkipReason.NOT_PERMITTED
        if action == A.BETRAY_ALLIANCE:
            edge = state.relationship(actor.id, target.id)
            if edge is None or not edge.can_betray(
                state.turn, self.config.betrayal_min_alliance_age
            ):
                return SkipReason.ALLIANCE_TOO_YOUNG
        return None

    def execute(
        self,
        actor: Actor,
        action: ActionType,
        target: Actor | None,
        state: GameState,
        rng: random.Random,
    ) -> ActionOutcome:
        """
        Execute one action of actor against target, mutating state in place.

        Args:
            actor: The acting actor (must belong to state)
            action: What the actor does
            target: Who it is done to (must belong to state)
            state: Game state to mutate
            rng: Random source

        Returns:
            ActionOutcome describing what happened or why it was skipped
        """
        target_id = target.id if target is not None else None
        skip = self.check(actor, action, target, state)
        if skip is not None:
            logger.debug("Skipped %s by %s: %s", action.value, actor.id, skip.value)
            return ActionOutcome(
                actor_id=actor.id, action=action, target_id=target_id, skip_reason=skip
            )
        assert target is not None

        turn = state.turn
        forward = self.relationships.get_or_create(state, actor.id, target.id)
        reverse = self.relationships.get_or_create(state, target.id, actor.id)

        success = True
        if action in CONTESTED_ACTIONS and self.config.contested_actions_can_fail:
            success = roll_chance(contested_success_chance(actor, target), rng)

        if success:
            mutations = ACTION_EFFECTS[action](EffectContext(actor, target, state, rng))
        else:
            mutations = [
                EdgeDelta(
                    source_id=target.id, target_id=actor.id, field="grudge", delta=FAILURE_GRUDGE
                ),
                EdgeDelta(
                    source_id=target.id,
                    target_id=actor.id,
                    field="disposition",
                    delta=FAILURE_DISPOSITION,
                ),
            ]
        self.apply_mutations(mutations, state, rng)

        forward.touch(turn)
        reverse.touch(turn)
        self._record_history(actor, action, target, turn, success)
        if success:
            self._record_memories(actor, action, target, turn)

        self.behavior.update_goal_progress(actor, action, target.id, success, turn)
        self.behavior.update_needs_after_action(actor, action, success)

        spy_captured = False
        if actor.is_active_spy:
            self.espionage.update_suspicion(actor, action, turn)
            spy_captured = self.espionage.roll_detection(actor, state, rng)

        actor.last_action_turn = turn
        event = self._maybe_surface(actor, action, target, state, rng)

        logger.info(
            "Turn %d: %s %s %s (%s)",
            turn,
            actor.id,
            action.value,
            target.id,
            "success" if success else "failed",
        )
        return ActionOutcome(
            actor_id=actor.id,
            action=action,
            target_id=target.id,
            executed=True,
            success=success,
            mutations=mutations,
            spy_captured=spy_captured,
            event=event,
        )

    # -------------------------------------------------------------------------
    # Mutation dispatch
    # -------------------------------------------------------------------------

    def apply_mutations(
        self, mutations: list[Mutation], state: GameState, rng: random.Random
    ) -> None:
        """Apply mutations in order. Mutations naming unknown actors are ignored."""
        turn = state.turn
        for mutation in mutations:
            if isinstance(mutation, EdgeDelta):
                edge = self.relationships.get_or_create(
                    state, mutation.source_id, mutation.target_id
                )
                edge.adjust(mutation.field, mutation.delta)
            elif isinstance(mutation, EdgeTransition):
                self._apply_transition(mutation, state, turn)
            elif isinstance(mutation, ActorDelta):
                subject = state.get_actor(mutation.actor_id)
                if subject is not None:
                    subject.adjust_gauge(mutation.field, mutation.delta)
            elif isinstance(mutation, StatusChange):
                subject = state.get_actor(mutation.actor_id)
                if subject is not None:
                    subject.set_status(mutation.status, turn, mutation.details)
            elif isinstance(mutation, LedgerDelta):
                state.ledger.adjust(mutation.indicator, mutation.delta)
            elif isinstance(mutation, LawProposal):
                self._submit_law_change(mutation, state, rng)

    def _apply_transition(self, mutation: EdgeTransition, state: GameState, turn: int) -> None:
        edge = self.relationships.get_or_create(state, mutation.source_id, mutation.target_id)
        kind = mutation.kind
        if kind == EdgeTransitionKind.FORM_ALLIANCE:
            edge.form_alliance(turn, mutation.strength)
        elif kind == EdgeTransitionKind.BREAK_ALLIANCE:
            edge.break_alliance(turn, mutation.reason)
        elif kind == EdgeTransitionKind.RECORD_BETRAYAL:
            edge.record_betrayal(turn, mutation.severity)
        elif kind == EdgeTransitionKind.DECLARE_RIVALRY:
            edge.declare_rivalry(turn)
        elif kind == EdgeTransitionKind.BECOME_CLIENT:
            edge.is_client = True
        elif kind == EdgeTransitionKind.BECOME_PATRON:
            edge.is_patron = True

    def _submit_law_change(
        self, mutation: LawProposal, state: GameState, rng: random.Random
    ) -> None:
        sponsor = state.get_actor(mutation.sponsor_id)
        if self.registry is None or sponsor is None:
            return
        proposal = select_beneficial_law_change(sponsor, state, self.registry, rng)
        if proposal is not None and self.registry.propose_change(proposal):
            logger.info("%s proposed %s -> %s", sponsor.id, proposal.title, proposal.new_state.value)

    # -------------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------------

    def _record_history(
        self, actor: Actor, action: ActionType, target: Actor, turn: int, success: bool
    ) -> None:
        actor_line, target_line = self.presenter.history_lines(action, actor.name, target.name)
        if not success:
            actor_line = f"{actor_line} (failed)"
            target_line = f"{target_line} (failed)"
        actor.record_interaction(
            Interaction(turn=turn, other_id=target.id, action=action.value, description=actor_line)
        )
        target.record_interaction(
            Interaction(
                turn=turn,
                other_id=actor.id,
                action=action.value,
                description=target_line,
                disposition_change=action.disposition_effect if success else FAILURE_DISPOSITION,
            )
        )

    def _record_memories(
        self, actor: Actor, action: ActionType, target: Actor, turn: int
    ) -> None:
        for record in MEMORY_RECORDS.get(action, ()):
            holder, other = (target, actor) if record.on_target else (actor, target)
            holder.add_memory(
                create_memory(
                    record.kind,
                    turn,
                    other_id=other.id,
                    severity=record.severity_for(action),
                    sentiment=record.sentiment,
                    description=f"{action.value.replace('_', ' ')} involving {other.name}",
                )
            )

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    def visibility_chance(
        self, actor: Actor, action: ActionType, target: Actor, state: GameState
    ) -> float:
        """Chance the player learns of this action."""
        cfg = self.visibility
        if state.is_player_patron_or_rival(actor.id) or state.is_player_patron_or_rival(
            target.id
        ):
            return cfg.player_network
        if max(actor.position, target.position) >= cfg.senior_position:
            return cfg.senior

        chance = cfg.base
        if action.is_dramatic:
            chance += cfg.dramatic_bonus
        elif action.is_governance:
            chance += cfg.governance_bonus
        elif state.player_track is not None and state.player_track in (actor.track, target.track):
            chance += cfg.same_track_bonus
        return min(1.0, chance)

    def _maybe_surface(
        self,
        actor: Actor,
        action: ActionType,
        target: Actor,
        state: GameState,
        rng: random.Random,
    ) -> NarrativeEvent | None:
        chance = self.visibility_chance(actor, action, target, state)
        if not roll_chance(chance, rng):
            return None
        high_visibility = max(actor.position, target.position) >= self.visibility.senior_position
        return NarrativeEvent(
            category=EventCategory.NETWORK_INTEL,
            priority=EventPriority.ELEVATED if high_visibility else EventPriority.BACKGROUND,
            kind="autonomous_action",
            turn=state.turn,
            initiator_id=actor.id,
            target_id=target.id,
            action=action,
            responses=intel_responses(),
        )
