from __future__ import annotations

import logging

from src.application.errors import NotFoundError, UnauthorizedError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.membership_token import MembershipToken

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    account_id: str,
    *,
    caller: str | None,
    admin_account: str,
) -> MembershipToken:
    if caller != admin_account:
        raise UnauthorizedError("Only the administrator can revoke membership tokens")

    removed = await uow.tokens.remove(account_id)
    if removed is None:
        raise NotFoundError("Token not found", details={"account_id": account_id})
    await uow.commit()
    # Proposals already resolved keep their recorded tallies; open ones see the
    # smaller holder count on their next vote.
    logger.info("Revoked membership token #%d of %s", removed.issuance_seq, account_id)
    return removed
