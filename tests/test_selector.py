"""Tests for autonomous action selection."""

from __future__ import annotations

import random

import pytest

from apparat.models import (
    ActionType,
    AgencyConfig,
    CareerTrack,
    GameState,
    GoalType,
    Indicator,
    Needs,
    create_actor,
    create_goal,
)
from apparat.services.selector import (
    FALLBACK_ACTION,
    ActionSelector,
    action_motivation,
    goal_alignment_bonus,
    need_satisfaction_bonus,
    party_devotion_modifier,
)


def _state(actor, stability: int = 50) -> GameState:
    state = GameState(turn=10)
    state.add_actor(actor)
    state.ledger.set_indicator(Indicator.STABILITY, stability)
    return state


class TestAvailableActions:
    """Tests for position, track and crisis gating."""

    def test_junior_only_schemes(self) -> None:
        actor = create_actor("a", "A", position=2, track=CareerTrack.SECURITY_SERVICES)
        available = ActionSelector().available_actions(actor, _state(actor))
        assert ActionType.DENOUNCE in available
        assert ActionType.LAUNCH_INVESTIGATION not in available
        assert ActionType.RESPOND_TO_CRISIS not in available

    def test_track_actions_need_matching_track(self) -> None:
        actor = create_actor("a", "A", position=3, track=CareerTrack.SECURITY_SERVICES)
        available = ActionSelector().available_actions(actor, _state(actor))
        assert ActionType.LAUNCH_INVESTIGATION in available
        assert ActionType.NEGOTIATE_TREATY not in available

    def test_reactive_actions_open_with_crisis(self) -> None:
        """Test that crisis responses appear only when the ledger calls for them."""
        actor = create_actor("a", "A", position=3)
        selector = ActionSelector()

        calm = selector.available_actions(actor, _state(actor, stability=60))
        assert ActionType.RESPOND_TO_CRISIS not in calm
        assert ActionType.SUPPRESS_UNREST not in calm

        tense = selector.available_actions(actor, _state(actor, stability=45))
        assert ActionType.RESPOND_TO_CRISIS in tense
        assert ActionType.SUPPRESS_UNREST not in tense

        unrest = selector.available_actions(actor, _state(actor, stability=30))
        assert ActionType.SUPPRESS_UNREST in unrest

    def test_shortage_and_incident(self) -> None:
        actor = create_actor("a", "A", position=3)
        state = _state(actor)
        selector = ActionSelector()
        assert ActionType.ADDRESS_SHORTAGE not in selector.available_actions(actor, state)
        assert ActionType.HANDLE_INCIDENT not in selector.available_actions(actor, state)

        state.ledger.set_indicator(Indicator.FOOD_SUPPLY, 30)
        state.ledger.set_indicator(Indicator.INTERNATIONAL_STANDING, 30)
        available = selector.available_actions(actor, state)
        assert ActionType.ADDRESS_SHORTAGE in available
        assert ActionType.HANDLE_INCIDENT in available

    def test_law_change_requires_committee_seat(self) -> None:
        actor = create_actor("a", "A", position=7)
        state = _state(actor)
        selector = ActionSelector()
        assert ActionType.PROPOSE_LAW_CHANGE not in selector.available_actions(actor, state)
        state.standing_committee.add("a")
        assert ActionType.PROPOSE_LAW_CHANGE in selector.available_actions(actor, state)


class TestWeights:
    """Tests for action weighting."""

    def test_security_need_favours_protection(self) -> None:
        """Test that a collapsing security need pushes toward protection."""
        calm = create_actor("a", "A", position=2)
        scared = create_actor("a", "A", position=2)
        scared.needs = Needs(security=10)
        selector = ActionSelector()

        calm_weights = selector.compute_weights(calm, _state(calm))
        scared_weights = selector.compute_weights(scared, _state(scared))

        # urgency (40 - 10) // 2 = 15, plus the flat satisfier bonus of 15
        assert (
            scared_weights[ActionType.SEEK_PROTECTION] - calm_weights[ActionType.SEEK_PROTECTION]
            == 30
        )
        assert scared_weights[ActionType.DENOUNCE] - calm_weights[ActionType.DENOUNCE] == -15

    def test_rival_hunter_prefers_investigation(self) -> None:
        actor = create_actor(
            "a", "A", position=6, ruthless=85, track=CareerTrack.SECURITY_SERVICES
        )
        actor.goals = [create_goal(GoalType.DESTROY_RIVAL, target_id="b")]
        weights = ActionSelector().compute_weights(actor, _state(actor, stability=25))
        assert weights[ActionType.LAUNCH_INVESTIGATION] > weights[ActionType.ORGANIZE_GATHERING]
        assert weights[ActionType.LAUNCH_INVESTIGATION] == 60

    def test_loyal_actor_never_betrays(self) -> None:
        actor = create_actor("a", "A", loyal=80, ruthless=90)
        weights = ActionSelector().compute_weights(actor, _state(actor, stability=20))
        assert weights[ActionType.BETRAY_ALLIANCE] == 0

    def test_committee_bonus_for_top_leadership(self) -> None:
        actor = create_actor("a", "A", position=7)
        state = _state(actor)
        state.standing_committee.add("a")
        weights = ActionSelector().compute_weights(actor, state)
        # base 20 plus the committee bonus
        assert weights[ActionType.PROPOSE_LAW_CHANGE] == 45

    def test_goal_alignment_sums_goals(self) -> None:
        actor = create_actor("a", "A")
        actor.goals = [
            create_goal(GoalType.SEEK_PROMOTION),
            create_goal(GoalType.FIND_PROTECTOR),
        ]
        assert goal_alignment_bonus(ActionType.CURRY_FAVOR, actor) == 40
        assert goal_alignment_bonus(ActionType.DETAIN_SUSPECT, actor) == 0

    def test_inactive_goals_ignored(self) -> None:
        actor = create_actor("a", "A")
        goal = create_goal(GoalType.SEEK_PROMOTION)
        goal.active = False
        actor.goals = [goal]
        assert goal_alignment_bonus(ActionType.CURRY_FAVOR, actor) == 0

    def test_ideology_shapes_campaigns(self) -> None:
        believer = create_actor("a", "A")
        believer.needs = Needs(ideological_commitment=90)
        cynic = create_actor("b", "B")
        cynic.needs = Needs(ideological_commitment=10)
        assert need_satisfaction_bonus(ActionType.IDEOLOGICAL_CAMPAIGN, believer) == 20
        assert need_satisfaction_bonus(ActionType.IDEOLOGICAL_CAMPAIGN, cynic) == -10

    def test_party_devotion(self) -> None:
        zealot = create_actor("a", "A", loyal=90, corrupt=20)
        assert party_devotion_modifier(ActionType.IDEOLOGICAL_CAMPAIGN, zealot) == 13
        assert party_devotion_modifier(ActionType.ENFORCE_DISCIPLINE, zealot) == 10
        assert party_devotion_modifier(ActionType.CONDUCT_SURVEILLANCE, zealot) == 8
        assert party_devotion_modifier(ActionType.SABOTAGE_PROJECT, zealot) == -20

        moderate = create_actor("b", "B", loyal=60)
        assert party_devotion_modifier(ActionType.IDEOLOGICAL_CAMPAIGN, moderate) == 0


class TestSelection:
    """Tests for drawing an action and the act gate."""

    def test_selected_action_is_available(self) -> None:
        actor = create_actor("a", "A", position=4, track=CareerTrack.STATE_MINISTRY)
        state = _state(actor)
        selector = ActionSelector()
        available = set(selector.available_actions(actor, state))
        rng = random.Random(12)
        for _ in range(30):
            assert selector.select_action_type(actor, state, rng) in available

    def test_fallback_without_positive_weight(self, monkeypatch) -> None:
        actor = create_actor("a", "A")
        selector = ActionSelector()
        monkeypatch.setattr(selector, "compute_weights", lambda actor, state: {})
        assert selector.select_action_type(actor, _state(actor), random.Random(0)) == FALLBACK_ACTION

    def test_motivation_and_chance(self) -> None:
        actor = create_actor("a", "A")
        assert action_motivation(actor) == 70
        assert ActionSelector().action_chance(actor) == pytest.approx(0.6)

    def test_cooldown_blocks_acting(self) -> None:
        actor = create_actor("a", "A", ambitious=100, ruthless=100, competent=100)
        state = _state(actor)
        actor.last_action_turn = state.turn - 1
        selector = ActionSelector()
        assert not selector.is_off_cooldown(actor, state.turn)
        assert not selector.should_act(actor, state, random.Random(0))

        actor.last_action_turn = state.turn - 2
        assert selector.is_off_cooldown(actor, state.turn)

    def test_highly_motivated_actor_always_acts(self) -> None:
        """Test that a chance at or above one always passes the gate."""
        actor = create_actor("a", "A", position=7)
        state = _state(actor)
        rng = random.Random(4)
        selector = ActionSelector(config=AgencyConfig(base_action_chance=1.0))
        assert all(selector.should_act(actor, state, rng) for _ in range(20))
