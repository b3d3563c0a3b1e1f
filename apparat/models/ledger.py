"""
Shared game-state ledger.

Named national indicators (always 0-100), a flag set and a string
variable map. The simulation reads and writes national consequences here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Indicator(str, Enum):
    """Named numeric indicators tracked by the ledger."""

    STABILITY = "stability"
    ELITE_LOYALTY = "elite_loyalty"
    POPULAR_SUPPORT = "popular_support"
    MILITARY_LOYALTY = "military_loyalty"
    INDUSTRIAL_OUTPUT = "industrial_output"
    INTERNATIONAL_STANDING = "international_standing"
    FOOD_SUPPLY = "food_supply"
    NETWORK = "network"
    STANDING = "standing"
    PATRON_FAVOR = "patron_favor"
    RIVAL_THREAT = "rival_threat"
    TREASURY = "treasury"
    REPUTATION_LOYAL = "reputation_loyal"
    REPUTATION_CUNNING = "reputation_cunning"


DEFAULT_INDICATOR_VALUE = 50


def _clamp(value: int) -> int:
    return max(0, min(100, value))


class Ledger(BaseModel):
    """Key/value store of indicators, flags and variables."""

    indicators: dict[Indicator, int] = Field(
        default_factory=lambda: {indicator: DEFAULT_INDICATOR_VALUE for indicator in Indicator}
    )
    flags: set[str] = Field(default_factory=set)
    variables: dict[str, str] = Field(default_factory=dict)

    def get(self, indicator: Indicator) -> int:
        return self.indicators.get(indicator, DEFAULT_INDICATOR_VALUE)

    def set_indicator(self, indicator: Indicator, value: int) -> int:
        self.indicators[indicator] = _clamp(value)
        return self.indicators[indicator]

    def adjust(self, indicator: Indicator, delta: int) -> int:
        """Shift an indicator, clamped to 0-100. Returns the new value."""
        return self.set_indicator(indicator, self.get(indicator) + delta)

    def apply_deltas(self, deltas: dict[Indicator, int]) -> None:
        for indicator, delta in deltas.items():
            self.adjust(indicator, delta)

    # Flags
    def add_flag(self, flag: str) -> None:
        self.flags.add(flag)

    def remove_flag(self, flag: str) -> None:
        self.flags.discard(flag)

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    # Variables
    def get_variable(self, key: str, default: str | None = None) -> str | None:
        return self.variables.get(key, default)

    def set_variable(self, key: str, value: str) -> None:
        self.variables[key] = value
