from __future__ import annotations

from src.application.errors import NotFoundError, UnauthorizedError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.policy import ProfilePolicy
from src.domain.value_objects.profile_field import ProfileField


def ensure_can_edit(
    policy: ProfilePolicy, caller: str | None, account_id: str, admin_account: str
) -> None:
    if not policy.allows(caller, account_id, admin_account):
        raise UnauthorizedError("Caller is not allowed to edit this token profile")


async def execute(
    uow: UnitOfWork,
    account_id: str,
    field: ProfileField,
    value: str | None,
    *,
    caller: str | None,
    admin_account: str,
    policy: ProfilePolicy = ProfilePolicy.OWNER_OR_ADMIN,
) -> None:
    ensure_can_edit(policy, caller, account_id, admin_account)
    limit = field.max_length
    if value is not None and limit is not None and len(value) > limit:
        raise ValidationError(
            f"Profile field {field.value} exceeds {limit} characters",
            details={"field": field.value, "max_length": limit},
        )
    updated = await uow.tokens.set_metadata_field(account_id, field.value, value)
    if not updated:
        raise NotFoundError("Token not found", details={"account_id": account_id})
    await uow.commit()
