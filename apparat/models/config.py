"""
Tunable parameters for the simulation.

Decay curves and probabilities are hand-tuned balance values, not
contracts. Relative ordering matters more than exact magnitudes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AgencyConfig(BaseModel):
    """Autonomous action pacing."""

    max_actions_per_turn: int = Field(default=3, ge=0, description="Actors that may act per turn")
    actor_cooldown: int = Field(
        default=2, ge=0, description="Turns between one actor's autonomous actions"
    )
    pair_cooldown: int = Field(
        default=2, ge=0, description="Turns between interactions of the same pair"
    )
    betrayal_min_alliance_age: int = Field(
        default=3, ge=0, description="Alliance age required before betrayal"
    )
    base_action_chance: float = Field(
        default=0.25, ge=0.0, le=1.0, description="Chance to act before motivation"
    )
    base_action_weight: int = Field(default=20, description="Starting weight of every action")
    contested_actions_can_fail: bool = Field(
        default=True, description="Roll for success on contested actions"
    )


class RelationshipDecayConfig(BaseModel):
    """How quickly quiet relationships drift back toward neutral."""

    grudge_decay: int = Field(default=2, ge=0)
    grudge_quiet_turns: int = Field(default=3, ge=0)
    gratitude_decay: int = Field(default=3, ge=0)
    gratitude_quiet_turns: int = Field(default=2, ge=0)
    fear_decay: int = Field(default=5, ge=0)
    fear_floor: int = Field(default=20, ge=0, le=100, description="Fear never decays below this")
    fear_quiet_turns: int = Field(default=4, ge=0)
    disposition_drift: int = Field(default=1, ge=0)
    disposition_quiet_turns: int = Field(default=5, ge=0)


class NeedDecayConfig(BaseModel):
    """Per-turn need erosion. Security erodes faster than stability."""

    security: int = Field(default=2, ge=0)
    power: int = Field(default=1, ge=0)
    loyalty: int = Field(default=1, ge=0)
    recognition: int = Field(default=2, ge=0)
    stability: int = Field(default=1, ge=0)
    junior_security: int = Field(default=2, ge=0, description="Extra erosion at position <= 2")
    crisis_penalty: int = Field(default=5, ge=0, description="Applied while national stability < 40")
    senior_power_gain: int = Field(default=3, ge=0)
    senior_recognition_gain: int = Field(default=2, ge=0)
    faction_loyalty_gain: int = Field(default=2, ge=0)
    protected_security_gain: int = Field(default=3, ge=0)


class VisibilityConfig(BaseModel):
    """Chance that an autonomous action reaches the player."""

    base: float = Field(default=0.5, ge=0.0, le=1.0)
    player_network: float = Field(default=1.0, ge=0.0, le=1.0)
    senior: float = Field(default=0.9, ge=0.0, le=1.0)
    senior_position: int = Field(default=4, ge=0)
    dramatic_bonus: float = Field(default=0.25, ge=0.0)
    governance_bonus: float = Field(default=0.15, ge=0.0)
    same_track_bonus: float = Field(default=0.2, ge=0.0)


class EspionageConfig(BaseModel):
    """Spy detection tuning."""

    base_vigilance: int = Field(default=50, ge=0, le=100)
    recent_activity_turns: int = Field(default=2, ge=0)
    recent_activity_penalty: int = Field(default=10, ge=0)
    investigation_window: int = Field(default=3, ge=0)
    investigation_suspicion: int = Field(default=20, ge=0)


class SimulationConfig(BaseModel):
    """Master configuration for the political simulation."""

    agency: AgencyConfig = Field(default_factory=AgencyConfig)
    relationship_decay: RelationshipDecayConfig = Field(default_factory=RelationshipDecayConfig)
    need_decay: NeedDecayConfig = Field(default_factory=NeedDecayConfig)
    visibility: VisibilityConfig = Field(default_factory=VisibilityConfig)
    espionage: EspionageConfig = Field(default_factory=EspionageConfig)
