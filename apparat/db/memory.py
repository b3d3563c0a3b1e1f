"""
In-memory implementations of collaborator interfaces for testing.

These implementations keep everything in lists and dictionaries, making
tests fast and isolated from the rest of the game.
"""

from __future__ import annotations

from apparat.models.event import NarrativeEvent
from apparat.models.law import Law, LawChangeProposal
from apparat.models.state import GameState


class InMemoryEventSink:
    """Collects emitted events in order."""

    def __init__(self) -> None:
        self.events: list[NarrativeEvent] = []

    def emit(self, event: NarrativeEvent) -> None:
        """Publish one event."""
        self.events.append(event)


class InMemoryLawRegistry:
    """
    In-memory law registry.

    Accepts every proposal that is not already pending.
    """

    def __init__(self, laws: list[Law] | None = None) -> None:
        self._laws: dict[str, Law] = {law.id: law for law in laws or []}
        self.proposals: list[LawChangeProposal] = []

    def list_laws(self) -> list[Law]:
        """All laws currently on the books."""
        return list(self._laws.values())

    def pending_titles(self) -> set[str]:
        """Titles of proposals already on the agenda."""
        return {proposal.title for proposal in self.proposals}

    def propose_change(self, proposal: LawChangeProposal) -> bool:
        """Submit a proposal. Returns True if it was placed on the agenda."""
        if proposal.law_id not in self._laws:
            return False
        if proposal.title in self.pending_titles():
            return False
        self.proposals.append(proposal)
        return True


class InMemoryStateStore:
    """Stores deep copies of game state keyed by game id."""

    def __init__(self) -> None:
        self._states: dict[str, GameState] = {}

    def save_state(self, game_id: str, state: GameState) -> None:
        """Insert or replace the state for a game."""
        self._states[game_id] = state.model_copy(deep=True)

    def load_state(self, game_id: str) -> GameState | None:
        """Load the state for a game, or None if unknown."""
        state = self._states.get(game_id)
        return state.model_copy(deep=True) if state is not None else None
