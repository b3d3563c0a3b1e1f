"""Tests for committee law-change preferences."""

from __future__ import annotations

import random

from apparat.db.memory import InMemoryLawRegistry
from apparat.models import (
    GameState,
    Law,
    LawChangeProposal,
    LawState,
    create_actor,
)
from apparat.services.laws import rank_law_preferences, select_beneficial_law_change

# --- helpers ---


def _setup(faction_name: str | None = "Reform Bloc"):
    actor = create_actor("a", "A", position=7, faction_id="f1" if faction_name else None)
    state = GameState(turn=4)
    state.add_actor(actor)
    if faction_name:
        state.faction_names["f1"] = faction_name
    return actor, state


def _laws() -> list[Law]:
    return [
        Law(id="l1", name="Price Controls", category="economic"),
        Law(id="l2", name="Press Code", category="institutional", losers=["Reform Bloc"]),
        Law(
            id="l3",
            name="Enterprise Autonomy",
            category="economic",
            beneficiaries=["Reform Bloc"],
        ),
        Law(id="l4", name="Border Regime", category="security"),
    ]


# --- ranking ---


def test_losers_outrank_beneficiaries_and_leanings():
    actor, state = _setup()
    registry = InMemoryLawRegistry(_laws())
    preferences = rank_law_preferences(actor, state, registry)

    assert [pref.law.id for pref in preferences] == ["l2", "l3", "l1"]
    assert [pref.priority for pref in preferences] == [3, 2, 1]
    assert preferences[0].new_state == LawState.MODIFIED_WEAK
    assert preferences[1].new_state == LawState.MODIFIED_STRONG
    assert preferences[2].new_state == LawState.MODIFIED_WEAK


def test_further_steps_from_modified_state():
    actor, state = _setup()
    registry = InMemoryLawRegistry(
        [
            Law(
                id="l2",
                name="Press Code",
                category="institutional",
                state=LawState.MODIFIED_WEAK,
                losers=["Reform Bloc"],
            ),
            Law(
                id="l3",
                name="Enterprise Autonomy",
                category="economic",
                state=LawState.MODIFIED_STRONG,
                beneficiaries=["Reform Bloc"],
            ),
        ]
    )
    preferences = rank_law_preferences(actor, state, registry)
    assert [pref.new_state for pref in preferences] == [
        LawState.ABOLISHED,
        LawState.STRENGTHENED,
    ]


def test_settled_laws_are_left_alone():
    actor, state = _setup()
    registry = InMemoryLawRegistry(
        [
            Law(
                id="l2",
                name="Press Code",
                category="institutional",
                state=LawState.ABOLISHED,
                losers=["Reform Bloc"],
            ),
            Law(
                id="l3",
                name="Enterprise Autonomy",
                category="economic",
                state=LawState.STRENGTHENED,
                beneficiaries=["Reform Bloc"],
            ),
        ]
    )
    assert rank_law_preferences(actor, state, registry) == []


def test_old_guard_hardens_institutions():
    actor, state = _setup("Old Guard")
    registry = InMemoryLawRegistry(_laws())
    preferences = rank_law_preferences(actor, state, registry)
    assert [pref.law.id for pref in preferences] == ["l2"]
    assert preferences[0].new_state == LawState.STRENGTHENED


def test_pending_proposals_skipped():
    actor, state = _setup()
    registry = InMemoryLawRegistry(_laws())
    registry.propose_change(
        LawChangeProposal(
            law_id="l2",
            law_name="Press Code",
            new_state=LawState.ABOLISHED,
            sponsor_id="x",
            turn=1,
        )
    )
    preferences = rank_law_preferences(actor, state, registry)
    assert "l2" not in [pref.law.id for pref in preferences]


def test_no_faction_wants_nothing():
    actor, state = _setup(None)
    registry = InMemoryLawRegistry(_laws())
    assert rank_law_preferences(actor, state, registry) == []


# --- selection ---


def test_select_builds_proposal_from_shortlist():
    actor, state = _setup()
    registry = InMemoryLawRegistry(_laws())
    proposal = select_beneficial_law_change(actor, state, registry, random.Random(3))

    assert proposal is not None
    assert proposal.law_id in {"l1", "l2", "l3"}
    assert proposal.sponsor_id == "a"
    assert proposal.turn == 4
    assert proposal.title == f"Modify: {proposal.law_name}"


def test_select_returns_none_without_preferences():
    actor, state = _setup()
    registry = InMemoryLawRegistry([Law(id="l4", name="Border Regime", category="security")])
    assert select_beneficial_law_change(actor, state, registry, random.Random(3)) is None
