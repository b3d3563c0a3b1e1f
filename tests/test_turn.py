"""Tests for whole-turn resolution."""

from __future__ import annotations

import random

from apparat.db.memory import InMemoryEventSink
from apparat.models import (
    AgencyConfig,
    CareerTrack,
    EventCategory,
    EventPriority,
    GameState,
    GoalType,
    Indicator,
    NarrativeEvent,
    SimulationConfig,
    create_actor,
)
from apparat.services.turn import TurnResolver, surface_event

TRACKS = list(CareerTrack)


class _Certain(random.Random):
    """Random source whose every chance roll succeeds."""

    def random(self) -> float:
        return 0.0


def _cast(count: int = 8, turn: int = 10) -> GameState:
    state = GameState(turn=turn)
    for index in range(count):
        state.add_actor(
            create_actor(
                f"a{index}",
                f"Official {index}",
                position=index % 7,
                track=TRACKS[index % len(TRACKS)],
                ambitious=40 + index * 5,
                ruthless=70 - index * 5,
            )
        )
    return state


def _eager_resolver(**kwargs) -> TurnResolver:
    config = SimulationConfig(agency=AgencyConfig(base_action_chance=1.0))
    return TurnResolver(config=config, **kwargs)


def _event(priority: EventPriority, kind: str) -> NarrativeEvent:
    return NarrativeEvent(
        category=EventCategory.CHARACTER_MESSAGE,
        priority=priority,
        kind=kind,
        turn=1,
        initiator_id="x",
    )


class TestSurfaceEvent:
    """Tests for picking the one event the player sees."""

    def test_highest_priority_wins(self) -> None:
        events = [
            _event(EventPriority.NORMAL, "first"),
            _event(EventPriority.URGENT, "second"),
            _event(EventPriority.ELEVATED, "third"),
        ]
        assert surface_event(events).kind == "second"

    def test_ties_go_to_earliest(self) -> None:
        events = [
            _event(EventPriority.BACKGROUND, "first"),
            _event(EventPriority.ELEVATED, "second"),
            _event(EventPriority.ELEVATED, "third"),
        ]
        assert surface_event(events).kind == "second"

    def test_no_events(self) -> None:
        assert surface_event([]) is None


class TestSetup:
    """Tests for preparing a fresh game."""

    def test_setup_seeds_edges_goals_and_needs(self) -> None:
        state = _cast(4)
        state.add_actor(create_actor("climber", "Climber", position=2, ambitious=90))
        prepared = TurnResolver().setup(state, 7)

        assert len(prepared.relationships) == 20
        assert prepared.actors["climber"].goals[0].goal_type == GoalType.SEEK_PROMOTION
        assert state.relationships == {}

    def test_patron_and_rival_kept_out_of_the_web(self) -> None:
        state = _cast(4)
        state.patron_id = "a0"
        state.rival_id = "a1"
        prepared = TurnResolver().setup(state, 7)
        assert len(prepared.relationships) == 2
        assert all("a0" not in key and "a1" not in key for key in prepared.relationships)


class TestResolveTurn:
    """Tests for resolving a turn."""

    def test_input_state_not_mutated(self) -> None:
        resolver = _eager_resolver()
        state = resolver.setup(_cast(), 1)
        before = state.model_dump()

        result = resolver.resolve_turn(state, 3)

        assert state.model_dump() == before
        assert result.state is not state

    def test_same_seed_same_result(self) -> None:
        resolver = _eager_resolver()
        state = resolver.setup(_cast(), 1)

        first = resolver.resolve_turn(state, 42)
        second = resolver.resolve_turn(state, 42)

        assert first.model_dump() == second.model_dump()

    def test_turn_counter_left_to_caller(self) -> None:
        resolver = _eager_resolver()
        state = resolver.setup(_cast(), 1)
        assert resolver.resolve_turn(state, 5).state.turn == state.turn

    def test_at_most_three_actions_execute(self) -> None:
        resolver = _eager_resolver()
        state = resolver.setup(_cast(), 1)
        for seed in range(5):
            result = resolver.resolve_turn(state, seed)
            executed = [outcome for outcome in result.outcomes if outcome.executed]
            assert len(executed) <= 3

    def test_actors_act_in_seniority_order(self) -> None:
        resolver = _eager_resolver()
        state = resolver.setup(_cast(), 1)
        order = [actor.id for actor in resolver.acting_order(state)]

        result = resolver.resolve_turn(state, 9)
        acted = [outcome.actor_id for outcome in result.outcomes]
        assert acted == sorted(acted, key=order.index)

    def test_action_limit_of_zero(self) -> None:
        config = SimulationConfig(
            agency=AgencyConfig(base_action_chance=1.0, max_actions_per_turn=0)
        )
        resolver = TurnResolver(config=config)
        state = resolver.setup(_cast(), 1)
        assert resolver.resolve_turn(state, 2).outcomes == []

    def test_reactive_event_preempts_actions(self) -> None:
        """Test that a character-initiated event ends the turn before anyone acts."""
        sink = InMemoryEventSink()
        resolver = _eager_resolver(sink=sink)
        state = _cast()
        state.add_actor(create_actor("p", "Patron", position=8))
        state.patron_id = "p"
        state.ledger.set_indicator(Indicator.PATRON_FAVOR, 10)
        state = resolver.setup(state, 1)

        result = resolver.resolve_turn(state, _Certain(0))

        assert result.outcomes == []
        assert result.surfaced is not None
        assert result.surfaced.kind == "patron_summons"
        assert sink.events == [result.surfaced]
        assert EventCategory.CHARACTER_SUMMONS in result.state.event_cooldowns.last_fired
        assert EventCategory.CHARACTER_SUMMONS not in state.event_cooldowns.last_fired

    def test_sink_receives_only_the_surfaced_event(self) -> None:
        sink = InMemoryEventSink()
        resolver = _eager_resolver(sink=sink)
        state = resolver.setup(_cast(), 1)

        result = resolver.resolve_turn(state, 11)

        if result.surfaced is None:
            assert sink.events == []
        else:
            assert sink.events == [result.surfaced]
            assert result.surfaced in result.events


class TestActingOrder:
    """Tests for who gets to act."""

    def test_descending_position_then_id(self) -> None:
        state = GameState()
        for actor_id, position in (("b", 2), ("a", 2), ("c", 5), ("d", 0)):
            state.add_actor(create_actor(actor_id, actor_id.upper(), position=position))
        order = TurnResolver().acting_order(state)
        assert [actor.id for actor in order] == ["c", "a", "b", "d"]

    def test_patron_and_rival_excluded(self) -> None:
        state = _cast(4)
        state.patron_id = "a3"
        state.rival_id = "a2"
        order = [actor.id for actor in TurnResolver().acting_order(state)]
        assert order == ["a1", "a0"]
