"""Laws an actor may try to change through the standing committee."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class LawState(str, Enum):
    """How strongly a law is currently enforced."""

    ABOLISHED = "abolished"
    MODIFIED_WEAK = "modified_weak"
    DEFAULT = "default"
    MODIFIED_STRONG = "modified_strong"
    STRENGTHENED = "strengthened"


class Law(BaseModel):
    """A law held by the external law registry."""

    id: str
    name: str
    category: str
    """e.g. "economic", "institutional"."""

    state: LawState = LawState.DEFAULT
    beneficiaries: list[str] = Field(default_factory=list)
    """Faction names that gain from this law."""

    losers: list[str] = Field(default_factory=list)
    """Faction names disadvantaged by this law."""


class LawChangeProposal(BaseModel):
    """A proposed change submitted to the law registry."""

    law_id: str
    law_name: str
    new_state: LawState
    sponsor_id: str
    turn: int

    @property
    def title(self) -> str:
        return f"Modify: {self.law_name}"
