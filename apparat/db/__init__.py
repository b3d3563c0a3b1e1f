"""Collaborator interfaces and in-memory implementations."""

from apparat.db.interfaces import ActionPresenter, EventSink, LawRegistry, StateStore
from apparat.db.memory import InMemoryEventSink, InMemoryLawRegistry, InMemoryStateStore

__all__ = [
    "ActionPresenter",
    "EventSink",
    "InMemoryEventSink",
    "InMemoryLawRegistry",
    "InMemoryStateStore",
    "LawRegistry",
    "StateStore",
]
