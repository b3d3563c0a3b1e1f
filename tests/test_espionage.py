"""Tests for foreign espionage: suspicion, detection and recruitment."""

from __future__ import annotations

import random

import pytest

from apparat.models import (
    ActionType,
    ActorStatus,
    CareerTrack,
    EspionageStatus,
    GameState,
    Indicator,
    MemoryKind,
    create_actor,
    create_memory,
)
from apparat.models.espionage import HANDLER_CODENAMES
from apparat.services.espionage import CAPTURE_DETAILS, EspionageService


class _FixedRoll(random.Random):
    """Random source whose integer rolls always land on one end of the range."""

    def __init__(self, low: bool) -> None:
        super().__init__(0)
        self.low = low

    def randint(self, a: int, b: int) -> int:
        return a if self.low else b


def _spy(actor_id: str = "s", suspicion: int = 0, tradecraft: int = 50, **traits):
    actor = create_actor(actor_id, "Spy", position=2, **traits)
    actor.espionage = EspionageStatus(
        foreign_power="atlantic_union", suspicion=suspicion, tradecraft=tradecraft
    )
    return actor


def _state(*actors, turn: int = 10) -> GameState:
    state = GameState(turn=turn)
    for actor in actors:
        state.add_actor(actor)
    return state


class TestSecurityServices:
    """Tests for the security head and vigilance."""

    def test_security_head_is_most_senior(self) -> None:
        state = _state(
            create_actor("x", "X", position=5, track=CareerTrack.SECURITY_SERVICES),
            create_actor("y", "Y", position=6, track=CareerTrack.SECURITY_SERVICES),
            create_actor("z", "Z", position=8),
        )
        assert EspionageService().security_head(state).id == "y"

    def test_no_head_below_rank(self) -> None:
        state = _state(create_actor("x", "X", position=4, track=CareerTrack.SECURITY_SERVICES))
        assert EspionageService().security_head(state) is None

    def test_base_vigilance(self) -> None:
        assert EspionageService().security_vigilance(_state(create_actor("a", "A"))) == 50

    def test_vigilance_modifiers(self) -> None:
        state = _state(
            create_actor(
                "head", "H", position=5, track=CareerTrack.SECURITY_SERVICES, competent=60
            ),
            create_actor("leader", "L", position=8, paranoid=70),
        )
        state.ledger.set_indicator(Indicator.STABILITY, 30)
        # 50 + 20 paranoid leader + 15 instability + 60 // 4
        assert EspionageService().security_vigilance(state) == 100

    def test_vigilance_from_head_competence(self) -> None:
        state = _state(
            create_actor(
                "head", "H", position=5, track=CareerTrack.SECURITY_SERVICES, competent=60
            )
        )
        assert EspionageService().security_vigilance(state) == 65


class TestDetection:
    """Tests for suspicion and detection rolls."""

    def test_detection_chance(self) -> None:
        spy = _spy(suspicion=50, tradecraft=50)
        state = _state(spy)
        # 50 // 5 + 50 // 10 - 50 // 10
        assert EspionageService().detection_chance(spy, state) == 10

    def test_recent_activity_raises_chance(self) -> None:
        spy = _spy(suspicion=50, tradecraft=50)
        spy.espionage.record_activity(9)
        state = _state(spy)
        assert EspionageService().detection_chance(spy, state) == 20

    def test_detection_chance_floor(self) -> None:
        spy = _spy(suspicion=0, tradecraft=100)
        assert EspionageService().detection_chance(spy, _state(spy)) == 1

    def test_non_spy_has_no_chance(self) -> None:
        actor = create_actor("a", "A")
        assert EspionageService().detection_chance(actor, _state(actor)) == 0

    def test_sabotage_raises_suspicion(self) -> None:
        spy = _spy(tradecraft=30)
        added = EspionageService().update_suspicion(spy, ActionType.SABOTAGE_PROJECT, 10)
        assert added == 13
        assert spy.espionage.suspicion == 13
        assert spy.espionage.cover == 76
        assert spy.espionage.last_activity_turn == 10

    def test_ordinary_action_draws_no_attention(self) -> None:
        spy = _spy()
        assert EspionageService().update_suspicion(spy, ActionType.CURRY_FAVOR, 10) == 0
        assert spy.espionage.suspicion == 0
        assert spy.espionage.last_activity_turn is None

    def test_recent_investigation_adds_suspicion(self) -> None:
        spy = _spy(tradecraft=50)
        spy.add_memory(create_memory(MemoryKind.WAS_INVESTIGATED, 8, other_id="x"))
        added = EspionageService().update_suspicion(spy, ActionType.CURRY_FAVOR, 10)
        assert added == 20

    def test_roll_detection_captures(self) -> None:
        spy = _spy()
        state = _state(spy)
        assert EspionageService().roll_detection(spy, state, _FixedRoll(low=True))
        assert spy.status == ActorStatus.DETAINED

    def test_roll_detection_misses(self) -> None:
        spy = _spy()
        state = _state(spy)
        assert not EspionageService().roll_detection(spy, state, _FixedRoll(low=False))
        assert spy.status == ActorStatus.ACTIVE

    def test_handle_caught_records_both_sides(self) -> None:
        spy = _spy()
        head = create_actor("head", "H", position=6, track=CareerTrack.SECURITY_SERVICES)
        state = _state(spy, head)
        EspionageService().handle_caught(spy, state)

        assert spy.status == ActorStatus.DETAINED
        assert spy.status_details == CAPTURE_DETAILS
        assert spy.status_turn == 10
        assert spy.memories[-1].kind == MemoryKind.WAS_DETAINED
        assert spy.memories[-1].other_id == "head"
        assert head.memories[-1].kind == MemoryKind.CAUGHT_SPY
        assert head.memories[-1].other_id == "s"

    def test_sweep_returns_captured_ids(self) -> None:
        first = _spy("s1")
        second = _spy("s2")
        loyal = create_actor("a", "A")
        state = _state(first, second, loyal)
        captured = EspionageService().sweep(state, _FixedRoll(low=True))
        assert captured == ["s1", "s2"]
        assert loyal.status == ActorStatus.ACTIVE

    def test_caught_spy_not_swept_again(self) -> None:
        spy = _spy()
        state = _state(spy)
        service = EspionageService()
        service.sweep(state, _FixedRoll(low=True))
        assert service.sweep(state, _FixedRoll(low=True)) == []


class TestRecruitment:
    """Tests for turning officials into foreign assets."""

    def test_recruitment_chance(self) -> None:
        actor = create_actor("a", "A", corrupt=80, loyal=20)
        service = EspionageService()
        assert service.recruitment_chance(actor, "atlantic_union") == pytest.approx(0.76)
        assert service.recruitment_chance(actor, "nowhere") == pytest.approx(0.16)

    def test_incorruptible_never_recruited(self) -> None:
        actor = create_actor("a", "A", corrupt=0, loyal=100)
        service = EspionageService()
        rng = random.Random(1)
        for turn in range(20):
            assert service.attempt_recruitment(actor, "atlantic_union", turn, rng) is None
        assert actor.espionage is None

    def test_existing_spy_not_recruited_twice(self) -> None:
        spy = _spy()
        result = EspionageService().attempt_recruitment(
            spy, "zimograd", 10, random.Random(1)
        )
        assert result is None
        assert spy.espionage.foreign_power == "atlantic_union"

    def test_recruit(self) -> None:
        actor = create_actor("a", "A", competent=70)
        status = EspionageService().recruit(actor, "korvath", 12, random.Random(5))
        assert actor.espionage is status
        assert status.foreign_power == "korvath"
        assert status.recruited_turn == 12
        assert status.handler_codename in HANDLER_CODENAMES
        assert 60 <= status.tradecraft <= 80
        assert actor.memories[-1].kind == MemoryKind.RECRUITED_BY_FOREIGN
        assert actor.is_active_spy


class TestEspionageStatus:
    """Tests for the spy's own risk gauges."""

    def test_detection_risk(self) -> None:
        status = EspionageStatus(foreign_power="korvath", suspicion=40)
        # 40 + 50 // 2 + 20 // 3
        assert status.detection_risk == 71
        assert status.is_high_risk
        assert status.is_operating

    def test_burned_spy_stops_operating(self) -> None:
        status = EspionageStatus(foreign_power="korvath", suspicion=80, tradecraft=100, cover=100)
        assert not status.is_operating
        assert status.detection_risk == 80

    def test_careful_spy_is_low_risk(self) -> None:
        status = EspionageStatus(foreign_power="korvath", tradecraft=90, cover=100)
        assert status.detection_risk == 5
        assert not status.is_high_risk
