"""
Core data models for Apparat.

These models describe the political world the simulation drives: actors
and their inner life, the directed relationships between them, the
national ledger, and the structured events handed to the narrative layer.
"""

from apparat.models.actions import (
    CONTESTED_ACTIONS,
    ActionCategory,
    ActionType,
    can_perform,
)
from apparat.models.actor import (
    Actor,
    ActorRole,
    ActorStatus,
    CareerTrack,
    Interaction,
    Personality,
    create_actor,
)
from apparat.models.config import (
    AgencyConfig,
    EspionageConfig,
    NeedDecayConfig,
    RelationshipDecayConfig,
    SimulationConfig,
    VisibilityConfig,
)
from apparat.models.espionage import EspionageStatus, recruitment_intensity
from apparat.models.event import (
    EventCategory,
    EventCooldowns,
    EventPriority,
    NarrativeEvent,
    ResponseOption,
)
from apparat.models.goals import Goal, GoalTheme, GoalType, create_goal
from apparat.models.law import Law, LawChangeProposal, LawState
from apparat.models.ledger import Indicator, Ledger
from apparat.models.memory import ActorMemory, MemoryKind, create_memory
from apparat.models.needs import NeedKind, Needs
from apparat.models.relationship import AllianceBreakReason, Relationship, RelationshipStance
from apparat.models.state import GameState

__all__ = [
    # Actions
    "CONTESTED_ACTIONS",
    "ActionCategory",
    "ActionType",
    "can_perform",
    # Actor
    "Actor",
    "ActorRole",
    "ActorStatus",
    "CareerTrack",
    "Interaction",
    "Personality",
    "create_actor",
    # Config
    "AgencyConfig",
    "EspionageConfig",
    "NeedDecayConfig",
    "RelationshipDecayConfig",
    "SimulationConfig",
    "VisibilityConfig",
    # Espionage
    "EspionageStatus",
    "recruitment_intensity",
    # Event
    "EventCategory",
    "EventCooldowns",
    "EventPriority",
    "NarrativeEvent",
    "ResponseOption",
    # Goals
    "Goal",
    "GoalTheme",
    "GoalType",
    "create_goal",
    # Law
    "Law",
    "LawChangeProposal",
    "LawState",
    # Ledger
    "Indicator",
    "Ledger",
    # Memory
    "ActorMemory",
    "MemoryKind",
    "create_memory",
    # Needs
    "NeedKind",
    "Needs",
    # Relationship
    "AllianceBreakReason",
    "Relationship",
    "RelationshipStance",
    # State
    "GameState",
]
