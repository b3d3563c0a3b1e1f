"""Tests for the relationship lifecycle service."""

from __future__ import annotations

import random

from apparat.models import CareerTrack, GameState, Relationship, create_actor
from apparat.services.relationships import RelationshipService


def _state() -> GameState:
    state = GameState(turn=1, patron_id="patron")
    state.add_actor(create_actor("a", "Arkady", faction_id="reform", position=2))
    state.add_actor(
        create_actor(
            "b", "Boris", faction_id="reform", position=2, track=CareerTrack.STATE_MINISTRY
        )
    )
    state.add_actor(create_actor("c", "Chen", faction_id="guard", position=4))
    state.add_actor(create_actor("patron", "The Patron", position=8))
    return state


class TestInitializeAll:
    """Tests for seeding every relationship edge."""

    def test_creates_every_ordered_pair(self) -> None:
        """Test that n eligible actors get n * (n - 1) edges."""
        state = _state()
        created = RelationshipService().initialize_all(state, random.Random(1))
        assert created == 6
        assert len(state.relationships) == 6

    def test_patron_and_rival_excluded(self) -> None:
        state = _state()
        RelationshipService().initialize_all(state, random.Random(1))
        assert all("patron" not in key for key in state.relationships)

    def test_existing_edges_untouched(self) -> None:
        """Test that a second pass creates nothing and keeps values."""
        state = _state()
        service = RelationshipService()
        service.initialize_all(state, random.Random(1))
        snapshot = {key: edge.model_copy() for key, edge in state.relationships.items()}
        assert service.initialize_all(state, random.Random(2)) == 0
        assert state.relationships == snapshot

    def test_same_faction_warmer_than_rival_faction(self) -> None:
        """Test that faction mates start warmer than outsiders on average."""
        state = _state()
        RelationshipService().initialize_all(state, random.Random(3))
        # a->b: same faction (20..40, different tracks so no track adjustment)
        assert state.relationship("a", "b").disposition >= 20
        # a->c: other faction (-20..0, same track different position adds 10)
        assert state.relationship("a", "c").disposition <= 10

    def test_values_stay_in_range(self) -> None:
        state = _state()
        RelationshipService().initialize_all(state, random.Random(4))
        for edge in state.relationships.values():
            assert -100 <= edge.disposition <= 100
            assert 0 <= edge.trust <= 100
            assert 0 <= edge.fear <= 100


class TestGetOrCreate:
    """Tests for lazily created edges."""

    def test_idempotent(self) -> None:
        """Test that two lookups without mutation return the same edge."""
        state = _state()
        service = RelationshipService()
        first = service.get_or_create(state, "a", "b")
        values = first.model_dump()
        second = service.get_or_create(state, "a", "b")
        assert second is first
        assert second.model_dump() == values

    def test_same_faction_baseline(self) -> None:
        state = _state()
        edge = RelationshipService().get_or_create(state, "a", "b")
        assert edge.disposition == 20
        assert edge.trust == 60

    def test_other_faction_baseline_with_superior(self) -> None:
        """Test fixed baselines plus the hierarchy adjustment."""
        state = _state()
        edge = RelationshipService().get_or_create(state, "a", "c")
        # other faction -10, same track different position +10
        assert edge.disposition == 0
        assert edge.trust == 40
        # c is two levels above a
        assert edge.fear == 40
        assert edge.respect == 60

    def test_subordinate_view(self) -> None:
        state = _state()
        edge = RelationshipService().get_or_create(state, "c", "a")
        assert edge.fear == 0
        assert edge.respect == 30

    def test_ruthless_target_feared(self) -> None:
        state = _state()
        state.add_actor(create_actor("d", "Dmitri", position=2, ruthless=90))
        edge = RelationshipService().get_or_create(state, "a", "d")
        assert edge.fear == 20

    def test_unknown_actor_gets_neutral_edge(self) -> None:
        state = _state()
        edge = RelationshipService().get_or_create(state, "a", "ghost")
        assert edge.disposition == 0
        assert edge.trust == 50
        assert ("a", "ghost") in state.relationships


class TestDecay:
    """Tests for per-turn relationship decay."""

    def _edge(self, **values) -> Relationship:
        return Relationship(source_id="a", target_id="b", created_turn=0, **values)

    def test_quiet_edge_decays(self) -> None:
        edge = self._edge(grudge=50, gratitude=30, fear=50, disposition=30)
        edge.touch(1)
        RelationshipService().decay_edge(edge, 10)
        assert edge.grudge == 48
        assert edge.gratitude == 27
        assert edge.fear == 45
        assert edge.disposition == 29

    def test_negative_disposition_drifts_up(self) -> None:
        edge = self._edge(disposition=-30)
        edge.touch(1)
        RelationshipService().decay_edge(edge, 10)
        assert edge.disposition == -29

    def test_fear_floor(self) -> None:
        """Test that fear never decays below the floor."""
        edge = self._edge(fear=22)
        edge.touch(1)
        RelationshipService().decay_edge(edge, 10)
        assert edge.fear == 20
        RelationshipService().decay_edge(edge, 20)
        assert edge.fear == 20

    def test_recent_edge_does_not_decay(self) -> None:
        edge = self._edge(grudge=50, gratitude=30, fear=50, disposition=30)
        edge.touch(8)
        RelationshipService().decay_edge(edge, 10)
        assert (edge.grudge, edge.gratitude, edge.fear, edge.disposition) == (50, 30, 50, 30)

    def test_decay_all_uses_state_turn(self) -> None:
        state = _state()
        service = RelationshipService()
        edge = service.get_or_create(state, "a", "b")
        edge.grudge = 10
        state.turn = 10
        service.decay_all(state)
        assert edge.grudge == 8


class TestQueries:
    """Tests for relationship queries."""

    def test_has_patron(self) -> None:
        state = _state()
        service = RelationshipService()
        assert not service.has_patron(state, "a")
        service.get_or_create(state, "a", "c").is_client = True
        assert service.has_patron(state, "a")

    def test_allied_and_rival(self) -> None:
        state = _state()
        service = RelationshipService()
        service.get_or_create(state, "a", "b").form_alliance(1, 50)
        service.get_or_create(state, "a", "c").declare_rivalry(1)
        assert service.is_allied(state, "a", "b")
        assert not service.is_allied(state, "b", "a")
        assert service.is_rival(state, "a", "c")
