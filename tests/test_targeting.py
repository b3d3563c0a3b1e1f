"""Tests for target selection."""

from __future__ import annotations

import random

from apparat.models import (
    ActionType,
    ActorStatus,
    CareerTrack,
    GameState,
    GoalType,
    MemoryKind,
    create_actor,
    create_goal,
    create_memory,
)
from apparat.services.relationships import RelationshipService
from apparat.services.targeting import (
    BASE_TARGET_WEIGHT,
    MIN_TARGET_WEIGHT,
    TargetSelector,
    build_target_rules,
    goal_target_bonus,
    memory_modifier,
)

# --- helpers ---


def _setup(*actors, turn: int = 10) -> GameState:
    state = GameState(turn=turn)
    for actor in actors:
        state.add_actor(actor)
    return state


def _investigated(actor, other_id: str, turn: int, severity: int = 80) -> None:
    actor.add_memory(
        create_memory(MemoryKind.WAS_INVESTIGATED, turn, other_id=other_id, severity=severity)
    )


# --- rules ---


def test_every_action_has_a_rule():
    rules = build_target_rules(3)
    assert set(rules) == set(ActionType)


# --- weighting ---


def test_was_investigated_memory_lowers_cooperation():
    actor = create_actor("a", "A")
    _investigated(actor, "b", turn=10)
    state = _setup(actor, create_actor("b", "B"), create_actor("c", "C"))
    selector = TargetSelector()
    b = state.get_actor("b")
    c = state.get_actor("c")

    assert selector.target_weight(actor, b, ActionType.FORM_ALLIANCE, 10) == MIN_TARGET_WEIGHT
    assert selector.target_weight(actor, b, ActionType.SHARE_INTELLIGENCE, 10) == MIN_TARGET_WEIGHT
    assert selector.target_weight(actor, c, ActionType.FORM_ALLIANCE, 10) == BASE_TARGET_WEIGHT
    assert selector.target_weight(actor, b, ActionType.DENOUNCE, 10) == 30


def test_memory_influence_fades():
    actor = create_actor("a", "A")
    _investigated(actor, "b", turn=0)
    # strength 100 - 20 * 5 // 10 = 90
    assert memory_modifier(actor, "b", ActionType.DENOUNCE, 20) == 18
    assert memory_modifier(actor, "b", ActionType.FORM_ALLIANCE, 20) == -27


def test_minor_memories_ignored():
    actor = create_actor("a", "A")
    _investigated(actor, "b", turn=10, severity=40)
    assert memory_modifier(actor, "b", ActionType.DENOUNCE, 10) == 0


def test_threat_response_depends_on_temperament():
    paranoid = create_actor("a", "A", paranoid=70)
    paranoid.add_memory(
        create_memory(MemoryKind.THREAT_RECEIVED, 10, other_id="b", severity=60)
    )
    calm = create_actor("c", "C", paranoid=30)
    calm.add_memory(create_memory(MemoryKind.THREAT_RECEIVED, 10, other_id="b", severity=60))

    assert memory_modifier(paranoid, "b", ActionType.SEEK_PROTECTION, 10) == 20
    assert memory_modifier(calm, "b", ActionType.SEEK_PROTECTION, 10) == 0


def test_goal_target_bonus_only_for_named_target():
    actor = create_actor("a", "A")
    actor.goals = [create_goal(GoalType.DESTROY_RIVAL, target_id="b")]
    assert goal_target_bonus(actor, "b", ActionType.DENOUNCE) == 30
    assert goal_target_bonus(actor, "c", ActionType.DENOUNCE) == 0
    assert goal_target_bonus(actor, "b", ActionType.CURRY_FAVOR) == 0


# --- candidates ---


def test_candidates_exclude_self_inactive_patron_and_rival():
    state = _setup(
        create_actor("a", "A"),
        create_actor("d", "D"),
        create_actor("b", "B"),
        create_actor("fallen", "F"),
        create_actor("patron", "P"),
        create_actor("rival", "R"),
    )
    state.get_actor("fallen").status = ActorStatus.EXILED
    state.patron_id = "patron"
    state.rival_id = "rival"

    actor = state.get_actor("a")
    pool = TargetSelector().candidates(actor, ActionType.SPREAD_RUMORS, state)
    assert [target.id for target in pool] == ["b", "d"]


def test_fallback_to_any_candidate():
    """Test that track-matched governance rules fall back to every candidate."""
    actor = create_actor("a", "A", position=4, track=CareerTrack.ECONOMIC_PLANNING)
    state = _setup(
        actor,
        create_actor("b", "B", track=CareerTrack.SECURITY_SERVICES),
        create_actor("c", "C", track=CareerTrack.FOREIGN_AFFAIRS),
    )
    pool = TargetSelector().candidates(actor, ActionType.SET_PRODUCTION_QUOTA, state)
    assert [target.id for target in pool] == ["b", "c"]


def test_no_candidate_means_no_target():
    actor = create_actor("a", "A")
    state = _setup(actor, create_actor("b", "B"))
    target = TargetSelector().choose_target(
        actor, ActionType.BETRAY_ALLIANCE, state, random.Random(1)
    )
    assert target is None


def test_betrayal_needs_mature_alliance():
    actor = create_actor("a", "A")
    state = _setup(actor, create_actor("b", "B"), create_actor("c", "C"))
    relationships = RelationshipService()
    relationships.get_or_create(state, "a", "b").form_alliance(7, 50)
    relationships.get_or_create(state, "a", "c").form_alliance(8, 50)

    pool = TargetSelector().candidates(actor, ActionType.BETRAY_ALLIANCE, state)
    assert [target.id for target in pool] == ["b"]


def test_ranked_rule_picks_among_best():
    actor = create_actor("a", "A", position=2)
    state = _setup(
        actor,
        create_actor("b", "B", position=3),
        create_actor("c", "C", position=5),
        create_actor("d", "D", position=5),
    )
    selector = TargetSelector()
    rng = random.Random(6)
    picks = {
        selector.select_target(actor, ActionType.SEEK_PROTECTION, state, rng).id
        for _ in range(30)
    }
    assert picks <= {"c", "d"}


# --- pair cooldown ---


def test_cooldown_forces_reselection():
    actor = create_actor("a", "A", position=1)
    state = _setup(
        actor,
        create_actor("b", "B", position=3),
        create_actor("c", "C", position=3),
    )
    RelationshipService().get_or_create(state, "a", "b").touch(state.turn)

    selector = TargetSelector()
    rng = random.Random(2)
    for _ in range(20):
        target = selector.choose_target(actor, ActionType.CURRY_FAVOR, state, rng)
        assert target is not None
        assert target.id == "c"


def test_second_cooldown_abandons_action():
    actor = create_actor("a", "A", position=1)
    state = _setup(
        actor,
        create_actor("b", "B", position=3),
        create_actor("c", "C", position=3),
    )
    relationships = RelationshipService()
    relationships.get_or_create(state, "a", "b").touch(state.turn)
    relationships.get_or_create(state, "a", "c").touch(state.turn - 1)

    target = TargetSelector().choose_target(
        actor, ActionType.CURRY_FAVOR, state, random.Random(3)
    )
    assert target is None


def test_cooldown_expires():
    actor = create_actor("a", "A", position=1)
    state = _setup(actor, create_actor("b", "B", position=3))
    RelationshipService().get_or_create(state, "a", "b").touch(state.turn - 2)

    target = TargetSelector().choose_target(
        actor, ActionType.CURRY_FAVOR, state, random.Random(3)
    )
    assert target is not None
    assert target.id == "b"
