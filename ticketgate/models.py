"""Data models for PR context, ticket lookups and pipeline results (Pydantic)."""

from enum import Enum
from typing import List, Union

from pydantic import BaseModel, ConfigDict


class PRContext(BaseModel):
    """Snapshot of the pull request being checked."""

    model_config = ConfigDict(frozen=True)

    title: str
    branch: str
    body: str = ""
    number: int
    repository: str


class VerifiedTicket(BaseModel):
    """Ticket that was found in the tracker."""

    model_config = ConfigDict(frozen=True)

    key: str
    url: str
    summary: str

    @property
    def verified(self) -> bool:
        return True


class UnverifiableTicket(BaseModel):
    """Ticket key that could not be looked up (HTTP error, network or parse failure)."""

    model_config = ConfigDict(frozen=True)

    key: str
    reason: str

    @property
    def verified(self) -> bool:
        return False


TicketLookupResult = Union[VerifiedTicket, UnverifiableTicket]


class TitleCheck(BaseModel):
    """Outcome of the title length rule."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    length: int
    cleaned: str


class GateDecision(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class PipelineResult(BaseModel):
    """What a completed run produced."""

    keys: List[str]
    results: List[TicketLookupResult]
    decision: GateDecision
    body: str
    updated: bool
