from __future__ import annotations

import logging

from src.application.errors import UnauthorizedError
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, *, caller: str | None, admin_account: str) -> int:
    if caller != admin_account:
        raise UnauthorizedError("Only the administrator can advance the minting round")
    state = await uow.registry.load()
    new_round = state.advance_round()
    await uow.registry.save(state)
    await uow.commit()
    logger.info("Minting round advanced to %d", new_round)
    return new_round
