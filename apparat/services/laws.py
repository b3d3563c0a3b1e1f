"""Law-change preferences for standing committee members."""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel

from apparat.db.interfaces import LawRegistry
from apparat.models.actor import Actor
from apparat.models.law import Law, LawChangeProposal, LawState
from apparat.models.state import GameState
from apparat.skills.dice import pick

logger = logging.getLogger(__name__)

SHORTLIST_SIZE = 3


class LawPreference(BaseModel):
    """A candidate change ranked by how much the sponsor wants it."""

    law: Law
    new_state: LawState
    priority: int


def _faction_preference(law: Law, faction: str) -> LawPreference | None:
    if faction in law.beneficiaries and law.state != LawState.STRENGTHENED:
        new_state = (
            LawState.MODIFIED_STRONG if law.state == LawState.DEFAULT else LawState.STRENGTHENED
        )
        return LawPreference(law=law, new_state=new_state, priority=2)
    if faction in law.losers and law.state != LawState.ABOLISHED:
        new_state = (
            LawState.MODIFIED_WEAK if law.state == LawState.DEFAULT else LawState.ABOLISHED
        )
        return LawPreference(law=law, new_state=new_state, priority=3)
    return None


def _leaning_preference(law: Law, faction: str) -> LawPreference | None:
    """Reformers loosen the economy; the old guard hardens the institutions."""
    lowered = faction.lower()
    if (
        "reform" in lowered
        and law.category == "economic"
        and law.state in (LawState.DEFAULT, LawState.MODIFIED_STRONG)
    ):
        return LawPreference(law=law, new_state=LawState.MODIFIED_WEAK, priority=1)
    if (
        ("old" in lowered or "guard" in lowered)
        and law.category == "institutional"
        and law.state != LawState.STRENGTHENED
    ):
        return LawPreference(law=law, new_state=LawState.STRENGTHENED, priority=1)
    return None


def rank_law_preferences(
    actor: Actor, state: GameState, registry: LawRegistry
) -> list[LawPreference]:
    """Every change the actor's faction would want, most wanted first."""
    faction = state.faction_name(actor.faction_id)
    if not faction:
        return []

    pending = registry.pending_titles()
    preferences = []
    for law in registry.list_laws():
        if f"Modify: {law.name}" in pending:
            continue
        preference = _faction_preference(law, faction) or _leaning_preference(law, faction)
        if preference is not None:
            preferences.append(preference)
    preferences.sort(key=lambda pref: (-pref.priority, pref.law.id))
    return preferences


def select_beneficial_law_change(
    actor: Actor,
    state: GameState,
    registry: LawRegistry,
    rng: random.Random,
) -> LawChangeProposal | None:
    """
    Pick a law change that benefits the actor's faction.

    Args:
        actor: Sponsoring committee member
        state: Current game state
        registry: Source of laws and pending proposals
        rng: Random source

    Returns:
        A proposal drawn from the top three preferences, or None
    """
    shortlist = rank_law_preferences(actor, state, registry)[:SHORTLIST_SIZE]
    chosen = pick(shortlist, rng)
    if chosen is None:
        logger.debug("%s found no law worth changing", actor.id)
        return None
    return LawChangeProposal(
        law_id=chosen.law.id,
        law_name=chosen.law.name,
        new_state=chosen.new_state,
        sponsor_id=actor.id,
        turn=state.turn,
    )
