"""Tests for the dice and chance skill."""

from __future__ import annotations

import random

import pytest

from apparat.skills.dice import pick, roll_chance, roll_percentile, roll_range, weighted_draw


class TestRollRange:
    """Test the roll_range function."""

    def test_within_bounds(self):
        """Test that every roll lands inside the inclusive range."""
        rng = random.Random(1)
        rolls = [roll_range(-10, 10, rng) for _ in range(200)]
        assert all(-10 <= r <= 10 for r in rolls)

    def test_single_value_range(self):
        """Test a degenerate range."""
        assert roll_range(7, 7, random.Random(0)) == 7

    def test_invalid_range(self):
        """Test that an inverted range raises ValueError."""
        with pytest.raises(ValueError, match="Invalid range"):
            roll_range(5, 1, random.Random(0))

    def test_same_seed_same_rolls(self):
        """Test that seeded sources reproduce the same sequence."""
        first = [roll_range(1, 100, random.Random(42)) for _ in range(3)]
        second = [roll_range(1, 100, random.Random(42)) for _ in range(3)]
        assert first == second


class TestRollPercentile:
    """Test d100 rolls against a target."""

    def test_success_matches_roll(self):
        rng = random.Random(3)
        for _ in range(50):
            result = roll_percentile(40, rng)
            assert 1 <= result.roll <= 100
            assert result.success == (result.roll <= 40)

    def test_always_succeeds_at_100(self):
        """Test that a target of 100 cannot fail."""
        rng = random.Random(9)
        assert all(roll_percentile(100, rng).success for _ in range(50))


class TestRollChance:
    """Test probability rolls."""

    def test_certain_and_impossible(self):
        rng = random.Random(5)
        assert all(roll_chance(1.0, rng) for _ in range(50))
        assert not any(roll_chance(0.0, rng) for _ in range(50))

    def test_out_of_range_probability_is_clamped(self):
        """Test that probabilities outside 0-1 behave as the nearest bound."""
        rng = random.Random(5)
        assert roll_chance(1.5, rng)
        assert not roll_chance(-0.5, rng)


class TestPick:
    """Test uniform picks."""

    def test_empty_sequence(self):
        assert pick([], random.Random(0)) is None

    def test_picks_member(self):
        items = ["a", "b", "c"]
        rng = random.Random(11)
        assert all(pick(items, rng) in items for _ in range(30))


class TestWeightedDraw:
    """Test weighted draws."""

    def test_no_positive_weight(self):
        """Test that zero and negative weights leave nothing to draw."""
        assert weighted_draw({"a": 0, "b": -5}, random.Random(0)) is None

    def test_single_positive_weight_always_wins(self):
        rng = random.Random(2)
        weights = {"a": 0, "b": 10, "c": -3}
        assert all(weighted_draw(weights, rng) == "b" for _ in range(30))

    def test_heavier_key_drawn_more_often(self):
        """Test that draws follow the weights."""
        rng = random.Random(8)
        draws = [weighted_draw({"light": 1, "heavy": 99}, rng) for _ in range(500)]
        assert draws.count("heavy") > draws.count("light")

    def test_empty_mapping(self):
        assert weighted_draw({}, random.Random(0)) is None
