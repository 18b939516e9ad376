from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotTokenHolderError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.proposal import Proposal

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateProposalInput:
    title: str
    description: str = ""


async def ensure_holder(uow: UnitOfWork, account_id: str, action: str) -> None:
    if not await uow.tokens.exists(account_id):
        raise NotTokenHolderError(
            f"Only token holders can {action}", details={"account_id": account_id}
        )


async def execute(uow: UnitOfWork, caller: str, payload: CreateProposalInput) -> int:
    await ensure_holder(uow, caller, "create proposals")
    title = (payload.title or "").strip()
    if not title:
        raise ValidationError("Proposal title cannot be empty")

    state = await uow.registry.load()
    proposal = Proposal.create(
        state.allocate_proposal_id(), title, payload.description or "", caller
    )
    await uow.proposals.add(proposal)
    await uow.registry.save(state)
    await uow.commit()
    logger.info("Proposal %d created by %s", proposal.id, caller)
    return proposal.id
