from __future__ import annotations

from src.application.errors import NotFoundError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.membership.update_profile import ensure_can_edit
from src.domain.value_objects.policy import ProfilePolicy

HANDLE_MAX_LENGTH = 255


async def execute(
    uow: UnitOfWork,
    account_id: str,
    handle: str,
    *,
    caller: str | None,
    admin_account: str,
    policy: ProfilePolicy = ProfilePolicy.OWNER_OR_ADMIN,
) -> None:
    ensure_can_edit(policy, caller, account_id, admin_account)
    handle = (handle or "").strip().lstrip("@")
    if not handle:
        raise ValidationError("External handle cannot be empty")
    if len(handle) > HANDLE_MAX_LENGTH:
        raise ValidationError(
            "External handle too long", details={"max_length": HANDLE_MAX_LENGTH}
        )
    updated = await uow.tokens.set_metadata_field(account_id, "external_handle", handle)
    if not updated:
        raise NotFoundError("Token not found", details={"account_id": account_id})
    await uow.commit()
