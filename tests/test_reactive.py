"""Tests for character-initiated reactive events."""

from __future__ import annotations

import random

import pytest

from apparat.models import (
    ActorRole,
    ActorStatus,
    EventCategory,
    EventPriority,
    GameState,
    Indicator,
    Interaction,
    create_actor,
)
from apparat.services.reactive import (
    ReactiveEvaluator,
    discovered_motivation,
    patron_caution,
    patron_motivation,
    rival_caution,
    rival_motivation,
)


class _Certain(random.Random):
    """Random source whose every chance roll succeeds."""

    def random(self) -> float:
        return 0.0


class _Never(random.Random):
    """Random source whose every chance roll fails."""

    def random(self) -> float:
        return 0.999


def _state(turn: int = 10, **indicators: int) -> GameState:
    state = GameState(turn=turn)
    for name, value in indicators.items():
        state.ledger.set_indicator(Indicator(name), value)
    return state


def _with_patron(**indicators: int) -> GameState:
    state = _state(**indicators)
    state.add_actor(create_actor("p", "Patron", position=6, role=ActorRole.PATRON))
    state.patron_id = "p"
    return state


def _with_rival(**indicators: int) -> GameState:
    state = _state(**indicators)
    state.add_actor(create_actor("r", "Rival", position=3, role=ActorRole.RIVAL))
    state.rival_id = "r"
    return state


class TestFormulas:
    """Tests for the motivation formulas."""

    def test_patron_motivation_rises_with_low_favor(self) -> None:
        patron = create_actor("p", "P")
        assert patron_motivation(patron, _state(patron_favor=50)) == 30
        assert patron_motivation(patron, _state(patron_favor=10)) == 55

    def test_cautions(self) -> None:
        actor = create_actor("x", "X", ruthless=50, ambitious=50)
        assert patron_caution(actor) == pytest.approx(0.75)
        assert rival_caution(actor) == pytest.approx(0.5)

    def test_rival_motivation(self) -> None:
        rival = create_actor("r", "R")
        state = _state(rival_threat=80, standing=30, patron_favor=40)
        # 40 + 12 + 20 weak standing + 15 weak favor
        assert rival_motivation(rival, state) == 87

    def test_discovered_motivation(self) -> None:
        actor = create_actor("d", "D", disposition=10)
        actor.record_interaction(Interaction(turn=9, other_id="player", action="met", description="Met"))
        assert discovered_motivation(actor, 10) == 50


class TestPatron:
    """Tests for the patron role."""

    def test_summons_when_favor_collapses(self) -> None:
        state = _with_patron(patron_favor=10)
        event = ReactiveEvaluator().evaluate(state, _Certain(0))

        assert event is not None
        assert event.kind == "patron_summons"
        assert event.category == EventCategory.CHARACTER_SUMMONS
        assert event.priority == EventPriority.URGENT
        assert event.is_urgent
        assert event.initiator_id == "p"
        assert state.event_cooldowns.last_fired[EventCategory.CHARACTER_SUMMONS] == 10

    def test_summons_respects_its_cooldown(self) -> None:
        state = _with_patron(patron_favor=10)
        evaluator = ReactiveEvaluator()
        assert evaluator.evaluate(state, _Certain(0)) is not None
        assert evaluator.evaluate(state, _Certain(0)) is None

    def test_warning_on_low_favor(self) -> None:
        state = _with_patron(patron_favor=30)
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == "patron_warning"
        assert event.priority == EventPriority.ELEVATED
        assert not event.is_urgent
        assert [option.key for option in event.responses] == ["acknowledge", "ask", "dismiss"]

    def test_directive_cooldown_silences_patron(self) -> None:
        state = _with_patron(patron_favor=30)
        state.event_cooldowns.record(EventCategory.PATRON_DIRECTIVE, 9)
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_failed_roll_means_no_event(self) -> None:
        state = _with_patron(patron_favor=30)
        assert ReactiveEvaluator().evaluate(state, _Never(0)) is None

    def test_content_patron_stays_quiet(self) -> None:
        state = _with_patron()
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_patron_takes_precedence_over_rival(self) -> None:
        state = _with_patron(patron_favor=30, rival_threat=80)
        state.add_actor(create_actor("r", "Rival", position=3))
        state.rival_id = "r"
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.initiator_id == "p"


class TestRival:
    """Tests for the rival role."""

    @pytest.mark.parametrize(
        ("threat", "kind", "priority"),
        [
            (80, "rival_plot", EventPriority.ELEVATED),
            (60, "rival_confrontation", EventPriority.ELEVATED),
            (40, "rival_probe", EventPriority.BACKGROUND),
        ],
    )
    def test_event_by_threat(self, threat: int, kind: str, priority: EventPriority) -> None:
        state = _with_rival(rival_threat=threat)
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == kind
        assert event.priority == priority
        assert event.category == EventCategory.RIVAL_ACTION

    def test_low_threat_rival_waits(self) -> None:
        state = _with_rival(rival_threat=20)
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_rival_cooldown(self) -> None:
        state = _with_rival(rival_threat=80)
        state.event_cooldowns.record(EventCategory.RIVAL_ACTION, 8)
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_fallen_rival_never_acts(self) -> None:
        state = _with_rival(rival_threat=80)
        state.get_actor("r").status = ActorStatus.EXILED
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None


class TestOtherRoles:
    """Tests for allies, contacts and discovered actors."""

    def test_well_informed_ally_assists(self) -> None:
        state = _state(network=50)
        state.add_actor(create_actor("a", "Ally", disposition=80))
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == "ally_assistance"
        assert event.category == EventCategory.CHARACTER_MESSAGE

    def test_ally_without_intel_asks_a_favor(self) -> None:
        state = _state(network=20)
        state.add_actor(create_actor("a", "Ally", disposition=72))
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == "ally_request"
        assert event.category == EventCategory.ALLY_REQUEST

    def test_lukewarm_ally_does_nothing(self) -> None:
        state = _state(network=20)
        state.add_actor(create_actor("a", "Ally", disposition=70))
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_contact_passes_intel(self) -> None:
        state = _state(network=60)
        state.add_actor(create_actor("c", "Contact", role=ActorRole.CONTACT))
        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == "contact_intel"
        assert event.category == EventCategory.NETWORK_INTEL

    def test_contact_needs_network(self) -> None:
        state = _state(network=30)
        state.add_actor(create_actor("c", "Contact", role=ActorRole.CONTACT))
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    @pytest.mark.parametrize(
        ("disposition", "kind", "priority"),
        [
            (10, "cold_reception", EventPriority.NORMAL),
            (50, "measuring_distance", EventPriority.BACKGROUND),
        ],
    )
    def test_discovered_actor_reaches_out(
        self, disposition: int, kind: str, priority: EventPriority
    ) -> None:
        state = _state()
        actor = create_actor("d", "D", disposition=disposition)
        actor.discovered = True
        actor.record_interaction(
            Interaction(turn=9, other_id="player", action="met", description="Met")
        )
        state.add_actor(actor)

        event = ReactiveEvaluator().evaluate(state, _Certain(0))
        assert event.kind == kind
        assert event.priority == priority
        assert actor.last_action_turn == 10

    def test_discovered_actor_needs_history(self) -> None:
        state = _state()
        actor = create_actor("d", "D", disposition=10)
        actor.discovered = True
        state.add_actor(actor)
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None

    def test_nobody_qualifies(self) -> None:
        state = _state()
        state.add_actor(create_actor("n", "Nobody"))
        assert ReactiveEvaluator().evaluate(state, _Certain(0)) is None
