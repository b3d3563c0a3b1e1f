"""
Foreign espionage inside the apparatus.

Spies accumulate suspicion as they work, and the security services roll
each turn to catch them. Recruitment turns a vulnerable official into an
asset of a foreign power.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from apparat.models.actions import ActionType
from apparat.models.actor import TOP_LEADERSHIP_POSITION, Actor, ActorStatus, CareerTrack
from apparat.models.config import EspionageConfig
from apparat.models.espionage import HANDLER_CODENAMES, EspionageStatus, recruitment_intensity
from apparat.models.ledger import Indicator
from apparat.models.memory import MemoryKind, create_memory
from apparat.models.state import GameState
from apparat.skills.dice import pick, roll_chance, roll_range

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

PARANOID_LEADER_THRESHOLD = 60
PARANOID_LEADER_VIGILANCE = 20
UNSTABLE_THRESHOLD = 40
UNSTABLE_VIGILANCE = 15
SECURITY_HEAD_POSITION = 5

CAPTURE_DETAILS = "Arrested for espionage"

# (base suspicion, tradecraft divisor) per espionage-relevant action
ACTION_SUSPICION: dict[ActionType, tuple[int, int]] = {
    ActionType.SHARE_INTELLIGENCE: (10, 20),
    ActionType.CONDUCT_SURVEILLANCE: (5, 25),
    ActionType.SABOTAGE_PROJECT: (15, 15),
}


def _suspicion_for(action: ActionType, tradecraft: int) -> int:
    entry = ACTION_SUSPICION.get(action)
    if entry is None:
        return 0
    base, divisor = entry
    return max(0, base - tradecraft // divisor)


@dataclass
class EspionageService:
    """Suspicion, detection, capture and recruitment of foreign agents."""

    config: EspionageConfig = field(default_factory=EspionageConfig)

    # -------------------------------------------------------------------------
    # Security services
    # -------------------------------------------------------------------------

    def security_head(self, state: GameState) -> Actor | None:
        """Most senior security official at or above head-of-service rank."""
        heads = [
            actor
            for actor in state.active_actors()
            if actor.track == CareerTrack.SECURITY_SERVICES
            and actor.position >= SECURITY_HEAD_POSITION
        ]
        if not heads:
            return None
        return min(heads, key=lambda actor: (-actor.position, actor.id))

    def security_vigilance(self, state: GameState) -> int:
        """How watchful the security services are this turn (0-100)."""
        vigilance = self.config.base_vigilance

        leaders = [
            actor
            for actor in state.active_actors()
            if actor.position >= TOP_LEADERSHIP_POSITION or actor.id == state.patron_id
        ]
        if any(leader.personality.paranoid > PARANOID_LEADER_THRESHOLD for leader in leaders):
            vigilance += PARANOID_LEADER_VIGILANCE

        if state.ledger.get(Indicator.STABILITY) < UNSTABLE_THRESHOLD:
            vigilance += UNSTABLE_VIGILANCE

        head = self.security_head(state)
        if head is not None:
            vigilance += head.personality.competent // 4

        return min(100, vigilance)

    def detection_chance(self, spy: Actor, state: GameState) -> int:
        """Percent chance the spy is caught this turn."""
        status = spy.espionage
        if status is None:
            return 0
        chance = status.suspicion // 5 + self.security_vigilance(state) // 10
        if (
            status.last_activity_turn is not None
            and state.turn - status.last_activity_turn <= self.config.recent_activity_turns
        ):
            chance += self.config.recent_activity_penalty
        chance -= status.tradecraft // 10
        return max(1, chance)

    # -------------------------------------------------------------------------
    # Spy activity
    # -------------------------------------------------------------------------

    def update_suspicion(self, spy: Actor, action: ActionType, turn: int) -> int:
        """
        Raise a spy's suspicion after an action.

        Returns:
            The suspicion added (0 when the action drew no attention)
        """
        status = spy.espionage
        if status is None:
            return 0

        increase = _suspicion_for(action, status.tradecraft)
        recently_investigated = any(
            memory.kind == MemoryKind.WAS_INVESTIGATED
            and turn - memory.turn <= self.config.investigation_window
            for memory in spy.memories
        )
        if recently_investigated:
            increase += self.config.investigation_suspicion

        if increase > 0:
            status.raise_suspicion(increase)
            status.erode_cover(increase // 3)
            status.record_activity(turn)
        return increase

    def roll_detection(self, spy: Actor, state: GameState, rng: random.Random) -> bool:
        """Roll whether the security services catch the spy; capture on success."""
        if not spy.is_active_spy:
            return False
        if rng.randint(1, 100) > self.detection_chance(spy, state):
            return False
        self.handle_caught(spy, state)
        return True

    def handle_caught(self, spy: Actor, state: GameState) -> None:
        """Detain a caught spy and record the capture on both sides."""
        turn = state.turn
        spy.set_status(ActorStatus.DETAINED, turn, CAPTURE_DETAILS)

        head = self.security_head(state)
        head_id = head.id if head is not None else None
        if head is not None:
            head.add_memory(
                create_memory(
                    MemoryKind.CAUGHT_SPY,
                    turn,
                    other_id=spy.id,
                    severity=90,
                    sentiment=50,
                    description=f"Unmasked {spy.name} as a foreign agent",
                )
            )
        spy.add_memory(
            create_memory(
                MemoryKind.WAS_DETAINED,
                turn,
                other_id=head_id,
                severity=95,
                sentiment=-95,
                description=CAPTURE_DETAILS,
            )
        )
        logger.info("Spy %s captured on turn %d", spy.id, turn)

    def sweep(self, state: GameState, rng: random.Random) -> list[str]:
        """
        Per-turn detection sweep over every active spy.

        Returns:
            Ids of spies captured this turn
        """
        captured = []
        for spy in sorted(state.active_actors(), key=lambda actor: actor.id):
            if spy.is_active_spy and self.roll_detection(spy, state, rng):
                captured.append(spy.id)
        return captured

    # -------------------------------------------------------------------------
    # Recruitment
    # -------------------------------------------------------------------------

    def recruitment_chance(self, actor: Actor, foreign_power: str) -> float:
        """Chance a foreign power turns the actor, from corruption and disloyalty."""
        traits = actor.personality
        vulnerability = (traits.corrupt + (100 - traits.loyal)) / 200
        return recruitment_intensity(foreign_power) / 100 * vulnerability

    def attempt_recruitment(
        self, actor: Actor, foreign_power: str, turn: int, rng: random.Random
    ) -> EspionageStatus | None:
        """Roll a recruitment attempt; recruits on success."""
        if actor.espionage is not None or not actor.is_active:
            return None
        if not roll_chance(self.recruitment_chance(actor, foreign_power), rng):
            return None
        return self.recruit(actor, foreign_power, turn, rng)

    def recruit(
        self, actor: Actor, foreign_power: str, turn: int, rng: random.Random
    ) -> EspionageStatus:
        """Make the actor an asset of a foreign power."""
        codename = pick(HANDLER_CODENAMES, rng) or HANDLER_CODENAMES[0]
        status = EspionageStatus(
            foreign_power=foreign_power,
            recruited_turn=turn,
            handler_codename=codename,
            tradecraft=max(0, min(100, actor.personality.competent + roll_range(-10, 10, rng))),
        )
        actor.espionage = status
        actor.add_memory(
            create_memory(
                MemoryKind.RECRUITED_BY_FOREIGN,
                turn,
                severity=80,
                sentiment=0,
                description=f"Recruited by {foreign_power} handler {codename}",
            )
        )
        logger.info("%s recruited by %s (%s)", actor.id, foreign_power, codename)
        return status
