from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.errors import NotFoundError
from src.application.services.governance import GovernanceFacade
from src.domain.models.proposal import ProposalView
from src.interfaces.http.deps import get_facade
from src.interfaces.http.schemas.proposals import (
    ProposalCreate,
    ProposalCreated,
    ProposalResponse,
    VoteCreate,
    VoteResponse,
)

router = APIRouter(prefix="/proposals", tags=["proposals"])


def _proposal_response(view: ProposalView) -> ProposalResponse:
    return ProposalResponse(
        id=view.id,
        title=view.title,
        description=view.description,
        proposer=view.proposer,
        votes_for=view.votes_for,
        votes_against=view.votes_against,
        voters=list(view.voters),
        status=view.status,
        created_at=view.created_at,
        resolved_at=view.resolved_at,
    )


@router.get("/", response_model=list[ProposalResponse])
async def list_proposals(*, facade: GovernanceFacade = Depends(get_facade)):
    return [_proposal_response(v) for v in await facade.get_all_proposals()]


@router.post("/", response_model=ProposalCreated, status_code=status.HTTP_201_CREATED)
async def create_proposal(
    payload: ProposalCreate,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    proposal_id = await facade.create_proposal(payload.title, payload.description)
    return ProposalCreated(id=proposal_id)


@router.get("/{proposal_id}", response_model=ProposalResponse)
async def get_proposal(
    proposal_id: int,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    view = await facade.get_proposal(proposal_id)
    if view is None:
        raise NotFoundError("Proposal not found", details={"proposal_id": proposal_id})
    return _proposal_response(view)


@router.post("/{proposal_id}/votes", response_model=VoteResponse)
async def vote(
    proposal_id: int,
    payload: VoteCreate,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    result = await facade.vote(proposal_id, payload.in_favor)
    return VoteResponse(
        proposal_id=result.proposal_id,
        status=result.status,
        votes_for=result.votes_for,
        votes_against=result.votes_against,
        quorum=result.quorum,
        resolved=result.resolved,
    )
