from __future__ import annotations

import logging

from src.application.errors import NotFoundError, UnauthorizedError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.policy import MintingPolicy

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    account_id: str,
    title: str,
    *,
    caller: str | None,
    admin_account: str,
    policy: MintingPolicy = MintingPolicy.ADMIN,
) -> None:
    # Titles are awarded by whoever may issue tokens.
    if not policy.allows(caller, admin_account):
        raise UnauthorizedError("Caller is not allowed to award titles")
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    if not await uow.tokens.append_title(account_id, title):
        raise NotFoundError("Token not found", details={"account_id": account_id})
    await uow.commit()
    logger.info("Awarded title %r to %s", title, account_id)
