from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.value_objects.proposal_status import ProposalStatus


class ProposalCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""


class ProposalCreated(BaseModel):
    id: int


class ProposalResponse(BaseModel):
    id: int
    title: str
    description: str
    proposer: str
    votes_for: int
    votes_against: int
    voters: list[str]
    status: ProposalStatus
    created_at: datetime
    resolved_at: datetime | None = None


class VoteCreate(BaseModel):
    in_favor: bool


class VoteResponse(BaseModel):
    proposal_id: int
    status: ProposalStatus
    votes_for: int
    votes_against: int
    quorum: int
    resolved: bool
