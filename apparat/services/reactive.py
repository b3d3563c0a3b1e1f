"""
Reactive motivation evaluator.

Decides whether the characters closest to the player (patron, rival,
allies, contacts and actors met during play) initiate something this
turn. Roles are checked in order and the first one that acts wins.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from apparat.models.actor import Actor, ActorRole
from apparat.models.event import (
    EventCategory,
    EventPriority,
    NarrativeEvent,
    ResponseOption,
)
from apparat.models.ledger import Indicator
from apparat.models.state import GameState

logger = logging.getLogger(__name__)


# =============================================================================
# Thresholds
# =============================================================================

CRITICAL_FAVOR = 20
LOW_FAVOR = 35
HIGH_FAVOR = 75
LOW_STABILITY = 40
CRITICAL_STABILITY = 30
CRISIS_STABILITY = 35

CRITICAL_RIVAL_THREAT = 75
HIGH_RIVAL_THREAT = 50
MODERATE_RIVAL_THREAT = 30

ALLY_DISPOSITION = 60
ALLY_REQUEST_DISPOSITION = 65
ALLY_INTEL_DISPOSITION = 75
ALLY_INTEL_NETWORK = 30
ALLY_ASSISTANCE_CHANCE = 0.6

CONTACT_NETWORK = 40
DISCOVERED_COOLDOWN = 5
RECENT_INTERACTION_WINDOW = 3
HOSTILE_DISPOSITION = 30
FRIENDLY_DISPOSITION = 70

IMPORTANT_EVENT = 7


def _option(key: str, label: str, sets_flag: str | None = None, **effects: int) -> ResponseOption:
    return ResponseOption(
        key=key,
        label=label,
        effects={Indicator(name): delta for name, delta in effects.items()},
        sets_flag=sets_flag,
    )


# =============================================================================
# Response Options
# =============================================================================

PATRON_SUMMONS_RESPONSES = (_option("go", "Go immediately"),)
PATRON_WARNING_RESPONSES = (
    _option("acknowledge", "Thank them for the warning"),
    _option("ask", "Ask what they know", patron_favor=3),
    _option("dismiss", "Assure them you have it in hand", patron_favor=-5),
)
PATRON_OPPORTUNITY_RESPONSES = (
    _option("accept_eager", "Accept eagerly", standing=5, patron_favor=5),
    _option("accept", "Accept with appropriate caution", standing=3),
    _option("defer", "Ask for time to consider", patron_favor=-3),
)
PATRON_DIRECTIVE_RESPONSES = (
    _option("accept", "Carry out the directive", patron_favor=5),
    _option("resources", "Ask for resources first", patron_favor=-2, network=5),
    _option("deflect", "Suggest someone better placed", patron_favor=-10),
)
RIVAL_ATTACK_RESPONSES = (
    _option("confront", "Confront them openly", standing=-5, rival_threat=-15),
    _option("evidence", "Quietly gather evidence", "gathering_rival_evidence", network=-3),
    _option("patron", "Take it to your patron", patron_favor=-8),
)
RIVAL_PROBE_RESPONSES = (
    _option("agree", "Agree with their assessment", rival_threat=-5, reputation_loyal=-3),
    _option("deflect", "Deflect with a joke", reputation_cunning=3),
    _option("loyal", "Restate your loyalty to the line", reputation_loyal=5, rival_threat=3),
)
ALLY_ASSISTANCE_RESPONSES = (
    _option("thank", "Thank them"),
    _option("investigate", "Follow up on what they found", network=3),
)
ALLY_REQUEST_RESPONSES = (
    _option("help", "Help them", network=5, patron_favor=-3),
    _option("delay", "Promise to look into it"),
    _option("refuse", "Decline", network=-3),
)
CONTACT_INTEL_RESPONSES = (
    _option("note", "Note it and move on"),
    _option("investigate", "Dig deeper", "investigating_intel", network=-2),
)
HOSTILE_RESPONSES = (
    _option("confront", "Confront their hostility directly", standing=-3),
    _option("ignore", "Ignore their posturing"),
    _option("reconcile", "Attempt to make amends", network=2),
)
FRIENDLY_RESPONSES = (
    _option("accept", "Accept their friendship graciously", network=3),
    _option("leverage", "See what they can offer you", network=2, reputation_cunning=2),
    _option("distance", "Maintain professional distance"),
)
NEUTRAL_RESPONSES = (
    _option("friendly", "Respond warmly"),
    _option("cautious", "Remain cautiously neutral"),
    _option("cold", "Be distant"),
)


# =============================================================================
# Motivation Formulas
# =============================================================================


def patron_motivation(patron: Actor, state: GameState) -> int:
    ledger = state.ledger
    favor = ledger.get(Indicator.PATRON_FAVOR)
    stability = ledger.get(Indicator.STABILITY)
    motivation = 20
    if favor < LOW_FAVOR:
        motivation += LOW_FAVOR - favor
    if favor > HIGH_FAVOR:
        motivation += (favor - HIGH_FAVOR) // 2
    if stability < CRISIS_STABILITY:
        motivation += (CRISIS_STABILITY - stability) // 2
    return motivation + patron.personality.paranoid // 5


def patron_opportunity(state: GameState) -> int:
    opportunity = 10
    if state.ledger.get(Indicator.RIVAL_THREAT) > 50:
        opportunity += 15
    if state.last_event_importance is not None and state.last_event_importance >= IMPORTANT_EVENT:
        opportunity += 10
    return opportunity


def patron_risk(patron: Actor, state: GameState) -> int:
    risk = 20
    if state.ledger.get(Indicator.STABILITY) > 70:
        risk += 20
    return risk + patron.personality.paranoid // 4


def patron_caution(patron: Actor) -> float:
    return (100 - patron.personality.ruthless) / 100 * 0.5 + 0.5


def rival_motivation(rival: Actor, state: GameState) -> int:
    ledger = state.ledger
    motivation = ledger.get(Indicator.RIVAL_THREAT) // 2 + rival.personality.ambitious // 4
    if ledger.get(Indicator.STANDING) < 40:
        motivation += 20
    if ledger.get(Indicator.PATRON_FAVOR) < 50:
        motivation += 15
    return motivation


def rival_opportunity(state: GameState) -> int:
    ledger = state.ledger
    opportunity = 5
    stability = ledger.get(Indicator.STABILITY)
    if stability < 50:
        opportunity += (50 - stability) // 3
    if ledger.get(Indicator.STANDING) < 35:
        opportunity += 20
    if ledger.get(Indicator.PATRON_FAVOR) < 40:
        opportunity += 10
    return opportunity


def rival_risk(rival: Actor, state: GameState) -> int:
    ledger = state.ledger
    risk = 30
    if ledger.get(Indicator.STABILITY) > 60:
        risk += 20
    if ledger.get(Indicator.STANDING) > 60:
        risk += 25
    return risk + rival.personality.paranoid // 3


def rival_caution(rival: Actor) -> float:
    return (100 - rival.personality.ambitious) / 100


def discovered_motivation(actor: Actor, turn: int) -> int:
    recent = actor.recent_interactions(turn, RECENT_INTERACTION_WINDOW)
    return (
        10
        + abs(actor.disposition - 50) // 2
        + actor.aggression_level // 5
        + len(recent) * 10
    )


# =============================================================================
# Evaluator
# =============================================================================


@dataclass
class ReactiveEvaluator:
    """Produces at most one character-initiated event per turn."""

    def evaluate(self, state: GameState, rng: random.Random) -> NarrativeEvent | None:
        """
        Check patron, rival, allies, contacts and discovered actors in turn.

        The first role that acts wins. Emitting an event records its
        category cooldown on the state.
        """
        event = self._evaluate_patron(state, rng) or self._evaluate_rival(state, rng)
        if event is None:
            for ally in self._allies(state):
                event = self._evaluate_ally(ally, state, rng)
                if event is not None:
                    break
        if event is None:
            for contact in self._contacts(state):
                event = self._evaluate_contact(contact, state, rng)
                if event is not None:
                    break
        if event is None:
            for actor in self._discovered(state):
                event = self._evaluate_discovered(actor, state, rng)
                if event is not None:
                    break

        if event is not None:
            state.event_cooldowns.record(event.category, state.turn)
            logger.info("Reactive event %s from %s", event.kind, event.initiator_id)
        return event

    # -------------------------------------------------------------------------
    # Role pools
    # -------------------------------------------------------------------------

    @staticmethod
    def _allies(state: GameState) -> list[Actor]:
        return sorted(
            (
                actor
                for actor in state.active_actors()
                if not state.is_player_patron_or_rival(actor.id)
                and actor.disposition >= ALLY_DISPOSITION
            ),
            key=lambda actor: actor.id,
        )

    @staticmethod
    def _contacts(state: GameState) -> list[Actor]:
        return sorted(
            (actor for actor in state.active_actors() if actor.role == ActorRole.CONTACT),
            key=lambda actor: actor.id,
        )

    @staticmethod
    def _discovered(state: GameState) -> list[Actor]:
        return sorted(
            (
                actor
                for actor in state.active_actors()
                if actor.discovered
                and not state.is_player_patron_or_rival(actor.id)
                and actor.role not in (ActorRole.CONTACT, ActorRole.INFORMANT)
            ),
            key=lambda actor: actor.id,
        )

    # -------------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------------

    def _evaluate_patron(self, state: GameState, rng: random.Random) -> NarrativeEvent | None:
        patron = state.get_actor(state.patron_id)
        if patron is None or not patron.is_active:
            return None

        motivation = patron_motivation(patron, state)
        threshold = patron_risk(patron, state) * patron_caution(patron)
        if motivation + patron_opportunity(state) <= threshold:
            return None
        if rng.random() >= motivation / 200:
            return None

        cooldowns = state.event_cooldowns
        if cooldowns.is_on_cooldown(EventCategory.PATRON_DIRECTIVE, state.turn):
            return None

        favor = state.ledger.get(Indicator.PATRON_FAVOR)
        stability = state.ledger.get(Indicator.STABILITY)
        if favor < CRITICAL_FAVOR:
            if cooldowns.is_on_cooldown(EventCategory.CHARACTER_SUMMONS, state.turn):
                return None
            return self._event(
                EventCategory.CHARACTER_SUMMONS,
                EventPriority.URGENT,
                "patron_summons",
                patron,
                state,
                PATRON_SUMMONS_RESPONSES,
                is_urgent=True,
            )
        if favor < LOW_FAVOR:
            return self._event(
                EventCategory.PATRON_DIRECTIVE,
                EventPriority.ELEVATED,
                "patron_warning",
                patron,
                state,
                PATRON_WARNING_RESPONSES,
            )
        if favor > HIGH_FAVOR and stability >= LOW_STABILITY:
            return self._event(
                EventCategory.PATRON_DIRECTIVE,
                EventPriority.NORMAL,
                "patron_opportunity",
                patron,
                state,
                PATRON_OPPORTUNITY_RESPONSES,
            )
        if stability < CRITICAL_STABILITY:
            return self._event(
                EventCategory.PATRON_DIRECTIVE,
                EventPriority.ELEVATED,
                "patron_directive",
                patron,
                state,
                PATRON_DIRECTIVE_RESPONSES,
            )
        return None

    def _evaluate_rival(self, state: GameState, rng: random.Random) -> NarrativeEvent | None:
        rival = state.get_actor(state.rival_id)
        if rival is None or not rival.is_active:
            return None

        motivation = rival_motivation(rival, state)
        threshold = rival_risk(rival, state) * rival_caution(rival)
        if motivation + rival_opportunity(state) <= threshold:
            return None
        if rng.random() >= motivation / 150:
            return None
        if state.event_cooldowns.is_on_cooldown(EventCategory.RIVAL_ACTION, state.turn):
            return None

        threat = state.ledger.get(Indicator.RIVAL_THREAT)
        if threat > CRITICAL_RIVAL_THREAT:
            kind, priority, responses = "rival_plot", EventPriority.ELEVATED, RIVAL_ATTACK_RESPONSES
        elif threat > HIGH_RIVAL_THREAT:
            kind, priority, responses = (
                "rival_confrontation",
                EventPriority.ELEVATED,
                RIVAL_ATTACK_RESPONSES,
            )
        elif threat > MODERATE_RIVAL_THREAT:
            kind, priority, responses = "rival_probe", EventPriority.BACKGROUND, RIVAL_PROBE_RESPONSES
        else:
            return None
        return self._event(EventCategory.RIVAL_ACTION, priority, kind, rival, state, responses)

    def _evaluate_ally(
        self, ally: Actor, state: GameState, rng: random.Random
    ) -> NarrativeEvent | None:
        motivation = (ally.disposition - 50) // 2
        has_intel = (
            ally.disposition > ALLY_INTEL_DISPOSITION
            and state.ledger.get(Indicator.NETWORK) > ALLY_INTEL_NETWORK
        )
        if motivation <= 10 and not has_intel:
            return None
        if rng.random() >= motivation / 100 + (0.15 if has_intel else 0.0):
            return None

        cooldowns = state.event_cooldowns
        if has_intel and rng.random() < ALLY_ASSISTANCE_CHANCE:
            if cooldowns.is_on_cooldown(EventCategory.CHARACTER_MESSAGE, state.turn):
                return None
            return self._event(
                EventCategory.CHARACTER_MESSAGE,
                EventPriority.NORMAL,
                "ally_assistance",
                ally,
                state,
                ALLY_ASSISTANCE_RESPONSES,
            )
        if ally.disposition > ALLY_REQUEST_DISPOSITION:
            if cooldowns.is_on_cooldown(EventCategory.ALLY_REQUEST, state.turn):
                return None
            return self._event(
                EventCategory.ALLY_REQUEST,
                EventPriority.NORMAL,
                "ally_request",
                ally,
                state,
                ALLY_REQUEST_RESPONSES,
            )
        return None

    def _evaluate_contact(
        self, contact: Actor, state: GameState, rng: random.Random
    ) -> NarrativeEvent | None:
        network = state.ledger.get(Indicator.NETWORK)
        if network < CONTACT_NETWORK:
            return None
        if rng.random() >= (network - 30) / 200:
            return None
        if state.event_cooldowns.is_on_cooldown(EventCategory.NETWORK_INTEL, state.turn):
            return None
        return self._event(
            EventCategory.NETWORK_INTEL,
            EventPriority.NORMAL,
            "contact_intel",
            contact,
            state,
            CONTACT_INTEL_RESPONSES,
        )

    def _evaluate_discovered(
        self, actor: Actor, state: GameState, rng: random.Random
    ) -> NarrativeEvent | None:
        if not actor.interactions:
            return None
        turn = state.turn
        if actor.last_action_turn is not None and turn - actor.last_action_turn < DISCOVERED_COOLDOWN:
            return None
        if rng.random() >= discovered_motivation(actor, turn) / 300:
            return None

        cooldowns = state.event_cooldowns
        if cooldowns.is_on_cooldown(EventCategory.CHARACTER_MESSAGE, turn):
            return None

        if actor.disposition < HOSTILE_DISPOSITION:
            if cooldowns.is_on_cooldown(EventCategory.RIVAL_ACTION, turn):
                return None
            kind, priority, responses = "cold_reception", EventPriority.NORMAL, HOSTILE_RESPONSES
        elif actor.disposition > FRIENDLY_DISPOSITION:
            kind, priority, responses = "friend_reaches_out", EventPriority.NORMAL, FRIENDLY_RESPONSES
        else:
            kind, priority, responses = "measuring_distance", EventPriority.BACKGROUND, NEUTRAL_RESPONSES

        actor.last_action_turn = turn
        return self._event(EventCategory.CHARACTER_MESSAGE, priority, kind, actor, state, responses)

    @staticmethod
    def _event(
        category: EventCategory,
        priority: EventPriority,
        kind: str,
        initiator: Actor,
        state: GameState,
        responses: tuple[ResponseOption, ...],
        *,
        is_urgent: bool = False,
    ) -> NarrativeEvent:
        return NarrativeEvent(
            category=category,
            priority=priority,
            kind=kind,
            turn=state.turn,
            initiator_id=initiator.id,
            is_urgent=is_urgent,
            responses=[option.model_copy() for option in responses],
        )
