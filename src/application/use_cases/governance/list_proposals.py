from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.proposal import ProposalView


async def execute(uow: UnitOfWork) -> list[ProposalView]:
    proposals = await uow.proposals.list_all()
    return [ProposalView.from_proposal(p) for p in sorted(proposals, key=lambda p: p.id)]
