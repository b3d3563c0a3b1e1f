"""
Simulation services for Apparat.

Services own the behaviour of the political world: relationship upkeep,
goal and need bookkeeping, action selection and targeting, effect
execution, espionage, the reactive evaluator and turn resolution.
"""

from apparat.services.behavior import BehaviorService
from apparat.services.effects import ActionOutcome, EffectExecutor, SkipReason
from apparat.services.espionage import EspionageService
from apparat.services.laws import select_beneficial_law_change
from apparat.services.presentation import PlainTextPresenter
from apparat.services.reactive import ReactiveEvaluator
from apparat.services.relationships import RelationshipService
from apparat.services.selector import ActionSelector
from apparat.services.targeting import TargetSelector
from apparat.services.turn import TurnResolver, TurnResult

__all__ = [
    "ActionOutcome",
    "ActionSelector",
    "BehaviorService",
    "EffectExecutor",
    "EspionageService",
    "PlainTextPresenter",
    "ReactiveEvaluator",
    "RelationshipService",
    "SkipReason",
    "TargetSelector",
    "TurnResolver",
    "TurnResult",
    "select_beneficial_law_change",
]
