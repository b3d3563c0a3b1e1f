"""
Turn resolution.

One call advances the political world by one turn: upkeep, the reactive
evaluator, then up to three autonomous actors in order of seniority.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from apparat.db.interfaces import ActionPresenter, EventSink, LawRegistry
from apparat.models.actor import Actor
from apparat.models.config import SimulationConfig
from apparat.models.event import NarrativeEvent
from apparat.models.state import GameState
from apparat.services.behavior import BehaviorService
from apparat.services.effects import ActionOutcome, EffectExecutor, SkipReason
from apparat.services.espionage import EspionageService
from apparat.services.presentation import PlainTextPresenter
from apparat.services.reactive import ReactiveEvaluator
from apparat.services.relationships import RelationshipService
from apparat.services.selector import ActionSelector
from apparat.services.targeting import TargetSelector

logger = logging.getLogger(__name__)


class TurnResult(BaseModel):
    """Outcome of resolving one turn."""

    state: GameState
    events: list[NarrativeEvent] = Field(default_factory=list)
    """Every candidate event raised this turn, in the order raised."""

    surfaced: NarrativeEvent | None = None
    """The single event handed to the player."""

    outcomes: list[ActionOutcome] = Field(default_factory=list)
    captured_spies: list[str] = Field(default_factory=list)


def surface_event(events: list[NarrativeEvent]) -> NarrativeEvent | None:
    """Highest priority wins; ties go to the earliest event."""
    if not events:
        return None
    return max(events, key=lambda event: event.priority)


@dataclass
class TurnResolver:
    """
    Advances a GameState by one turn.

    Services are wired from the shared SimulationConfig unless supplied.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    sink: EventSink | None = None
    registry: LawRegistry | None = None
    presenter: ActionPresenter = field(default_factory=PlainTextPresenter)

    relationships: RelationshipService = field(init=False)
    behavior: BehaviorService = field(init=False)
    espionage: EspionageService = field(init=False)
    reactive: ReactiveEvaluator = field(init=False)
    selector: ActionSelector = field(init=False)
    targeting: TargetSelector = field(init=False)
    executor: EffectExecutor = field(init=False)

    def __post_init__(self) -> None:
        cfg = self.config
        self.relationships = RelationshipService(decay=cfg.relationship_decay)
        self.behavior = BehaviorService(need_decay=cfg.need_decay, relationships=self.relationships)
        self.espionage = EspionageService(config=cfg.espionage)
        self.reactive = ReactiveEvaluator()
        self.selector = ActionSelector(config=cfg.agency)
        self.targeting = TargetSelector(config=cfg.agency)
        self.executor = EffectExecutor(
            config=cfg.agency,
            visibility=cfg.visibility,
            relationships=self.relationships,
            behavior=self.behavior,
            espionage=self.espionage,
            presenter=self.presenter,
            registry=self.registry,
        )

    def setup(self, state: GameState, rng: random.Random | int) -> GameState:
        """
        Prepare a fresh game: relationship edges, needs and goals.

        Returns:
            A new, initialised GameState
        """
        rng = rng if isinstance(rng, random.Random) else random.Random(rng)
        prepared = state.model_copy(deep=True)
        self.relationships.initialize_all(prepared, rng)
        self.behavior.initialize_all(prepared, rng)
        return prepared

    def resolve_turn(self, state: GameState, rng: random.Random | int) -> TurnResult:
        """
        Resolve the current turn of a game.

        The input state is never mutated. The returned state keeps the same
        turn number; advancing the turn counter belongs to the caller.

        Args:
            state: State at the start of the turn
            rng: Random source, or an integer seed

        Returns:
            TurnResult with the new state, every candidate event and the
            surfaced one
        """
        rng = rng if isinstance(rng, random.Random) else random.Random(rng)
        new_state = state.model_copy(deep=True)

        self.relationships.decay_all(new_state)
        self.behavior.decay_all_needs(new_state)
        captured = self.espionage.sweep(new_state, rng)

        reactive = self.reactive.evaluate(new_state, rng)
        if reactive is not None:
            return self._finish(new_state, [reactive], [], captured)

        outcomes = self.run_autonomous_actions(new_state, rng)
        events = [outcome.event for outcome in outcomes if outcome.event is not None]
        return self._finish(new_state, events, outcomes, captured)

    def run_autonomous_actions(self, state: GameState, rng: random.Random) -> list[ActionOutcome]:
        """Let eligible actors act, most senior first, up to the per-turn limit."""
        outcomes: list[ActionOutcome] = []
        executed = 0
        for actor in self.acting_order(state):
            if executed >= self.config.agency.max_actions_per_turn:
                break
            if not actor.is_active or not self.selector.should_act(actor, state, rng):
                continue
            outcome = self.act(actor, state, rng)
            outcomes.append(outcome)
            if outcome.executed:
                executed += 1
        return outcomes

    def acting_order(self, state: GameState) -> list[Actor]:
        eligible = [
            actor
            for actor in state.active_actors()
            if not state.is_player_patron_or_rival(actor.id)
        ]
        return sorted(eligible, key=lambda actor: (-actor.position, actor.id))

    def act(self, actor: Actor, state: GameState, rng: random.Random) -> ActionOutcome:
        """Select an action and target for one actor and execute it."""
        action = self.selector.select_action_type(actor, state, rng)
        target = self.targeting.choose_target(actor, action, state, rng)
        if target is None:
            logger.debug("%s found no target for %s", actor.id, action.value)
            return ActionOutcome(
                actor_id=actor.id, action=action, skip_reason=SkipReason.NO_TARGET
            )
        return self.executor.execute(actor, action, target, state, rng)

    def _finish(
        self,
        state: GameState,
        events: list[NarrativeEvent],
        outcomes: list[ActionOutcome],
        captured: list[str],
    ) -> TurnResult:
        surfaced = surface_event(events)
        if surfaced is not None and self.sink is not None:
            self.sink.emit(surfaced)
        return TurnResult(
            state=state,
            events=events,
            surfaced=surfaced,
            outcomes=outcomes,
            captured_spies=captured,
        )
