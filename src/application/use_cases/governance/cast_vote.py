from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import AlreadyVotedError, NotFoundError, ProposalNotActiveError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.governance.create_proposal import ensure_holder
from src.domain.models.proposal import quorum_for
from src.domain.value_objects.proposal_status import ProposalStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VoteResult:
    proposal_id: int
    status: ProposalStatus
    votes_for: int
    votes_against: int
    quorum: int
    resolved: bool


async def execute(uow: UnitOfWork, caller: str, proposal_id: int, in_favor: bool) -> VoteResult:
    await ensure_holder(uow, caller, "vote")

    proposal = await uow.proposals.get_for_update(proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal not found", details={"proposal_id": proposal_id})
    if not proposal.is_active():
        raise ProposalNotActiveError(
            "Proposal is not active",
            details={"proposal_id": proposal_id, "status": proposal.status.value},
        )
    if proposal.has_voted(caller):
        raise AlreadyVotedError(
            "Account has already voted",
            details={"proposal_id": proposal_id, "account_id": caller},
        )

    # Quorum follows the live holder count at the moment of this vote.
    holders = await uow.tokens.count()
    # Resolve against the stored tally, which includes ballots committed since the read.
    proposal = await uow.proposals.record_vote(proposal.id, caller, in_favor)
    resolved = proposal.resolve(holders)
    if resolved:
        await uow.proposals.mark_resolved(proposal)
    await uow.commit()

    if resolved:
        logger.info(
            "Proposal %d resolved as %s (%d for, %d against, %d holders)",
            proposal.id,
            proposal.status.value,
            proposal.votes_for,
            proposal.votes_against,
            holders,
        )
    return VoteResult(
        proposal_id=proposal.id,
        status=proposal.status,
        votes_for=proposal.votes_for,
        votes_against=proposal.votes_against,
        quorum=quorum_for(holders),
        resolved=resolved,
    )
