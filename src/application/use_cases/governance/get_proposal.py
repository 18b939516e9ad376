from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.proposal import ProposalView


async def execute(uow: UnitOfWork, proposal_id: int) -> ProposalView | None:
    proposal = await uow.proposals.get(proposal_id)
    return ProposalView.from_proposal(proposal) if proposal else None
