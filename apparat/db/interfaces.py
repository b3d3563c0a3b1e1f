"""
Collaborator interface definitions for Apparat.

Uses Protocol classes to define the contract for everything outside the
simulation core: the narrative sink, the law registry, presentation text
and state persistence. Implementations can be real game services or the
in-memory versions used in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from apparat.models.actions import ActionType
    from apparat.models.event import NarrativeEvent
    from apparat.models.law import Law, LawChangeProposal
    from apparat.models.state import GameState


class EventSink(Protocol):
    """Receives structured narrative events for rendering."""

    def emit(self, event: NarrativeEvent) -> None:
        """Publish one event."""
        ...


class LawRegistry(Protocol):
    """
    Interface to the standing committee's law registry.

    The simulation only chooses what to propose; voting happens elsewhere.
    """

    def list_laws(self) -> list[Law]:
        """All laws currently on the books."""
        ...

    def pending_titles(self) -> set[str]:
        """Titles of proposals already on the agenda."""
        ...

    def propose_change(self, proposal: LawChangeProposal) -> bool:
        """Submit a proposal. Returns True if it was placed on the agenda."""
        ...


class ActionPresenter(Protocol):
    """Presentation text for actions, kept out of the decision logic."""

    def history_lines(self, action: ActionType, actor_name: str, target_name: str) -> tuple[str, str]:
        """Return (actor's outcome line, target's outcome line)."""
        ...


class StateStore(Protocol):
    """Persistence for game state between turns."""

    def save_state(self, game_id: str, state: GameState) -> None:
        """Insert or replace the state for a game."""
        ...

    def load_state(self, game_id: str) -> GameState | None:
        """Load the state for a game, or None if unknown."""
        ...
