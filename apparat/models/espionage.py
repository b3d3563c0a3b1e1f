"""Foreign-agent status for actors secretly working for another power."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

HIGH_RISK_THRESHOLD = 60
BURNED_SUSPICION = 80

HANDLER_CODENAMES = (
    "CARDINAL",
    "BISHOP",
    "FALCON",
    "RAVEN",
    "WINTER",
    "SPARROW",
    "ORCHID",
    "LANTERN",
)

# How aggressively each foreign power recruits inside the apparatus (0-100)
RECRUITMENT_INTENSITY: dict[str, int] = {
    "atlantic_union": 95,
    "commonwealth_islands": 85,
    "zimograd": 70,
    "korvath": 65,
    "brechtland": 50,
    "marzovia": 45,
    "federated_states": 30,
}
DEFAULT_RECRUITMENT_INTENSITY = 20


def recruitment_intensity(foreign_power: str) -> int:
    """Return how hard a foreign power tries to recruit assets."""
    return RECRUITMENT_INTENSITY.get(foreign_power, DEFAULT_RECRUITMENT_INTENSITY)


class EspionageStatus(BaseModel):
    """Covert affiliation of an actor with a foreign power."""

    foreign_power: str
    recruited_turn: int = 0
    handler_codename: str = HANDLER_CODENAMES[0]

    secrets_passed: int = 0
    assets_recruited: int = 0
    sabotage_acts: int = 0

    suspicion: Annotated[int, Field(ge=0, le=100)] = 0
    """How much the security services suspect this actor."""

    cover: Annotated[int, Field(ge=0, le=100)] = 80
    """Integrity of the actor's cover story."""

    tradecraft: Annotated[int, Field(ge=0, le=100)] = 50
    """Skill at avoiding notice."""

    last_activity_turn: int | None = None

    @property
    def detection_risk(self) -> int:
        risk = (
            self.suspicion
            + (100 - self.tradecraft) // 2
            + (100 - self.cover) // 3
        )
        return min(100, risk)

    @property
    def is_high_risk(self) -> bool:
        return self.detection_risk >= HIGH_RISK_THRESHOLD

    @property
    def is_operating(self) -> bool:
        """Still passing material rather than lying low."""
        return self.suspicion < BURNED_SUSPICION

    def raise_suspicion(self, amount: int) -> None:
        self.suspicion = max(0, min(100, self.suspicion + amount))

    def erode_cover(self, amount: int) -> None:
        self.cover = max(0, min(100, self.cover - amount))

    def record_activity(self, turn: int) -> None:
        self.last_activity_turn = turn
