from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import DuplicateTokenError, UnauthorizedError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.membership_token import MembershipToken, TokenMetadata
from src.domain.value_objects.account_id import parse_account_id
from src.domain.value_objects.policy import MintingPolicy
from src.domain.value_objects.profile_field import ProfileField

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255


@dataclass(slots=True)
class MintTokenInput:
    account_id: str
    cooperative_id: str
    governance_role: str = "Member"
    title: str | None = None
    description: str | None = None
    avatar: str | None = None
    image: str | None = None
    did: str | None = None


def build_metadata(payload: MintTokenInput) -> TokenMetadata:
    role = (payload.governance_role or "").strip()
    cooperative_id = (payload.cooperative_id or "").strip()
    missing = [
        name for name, value in (("governance_role", role), ("cooperative_id", cooperative_id))
        if not value
    ]
    if missing:
        raise ValidationError("Missing required token metadata", details={"fields": missing})
    too_long = [
        field.value
        for field in ProfileField
        if field.max_length is not None
        and len(getattr(payload, field.value) or "") > field.max_length
    ]
    if len(payload.title or "") > TITLE_MAX_LENGTH:
        too_long.append("title")
    if too_long:
        raise ValidationError("Token metadata too long", details={"fields": too_long})
    return TokenMetadata(
        governance_role=role,
        cooperative_id=cooperative_id,
        title=payload.title,
        description=payload.description,
        avatar=payload.avatar,
        image=payload.image,
        did=payload.did,
    )


async def execute(
    uow: UnitOfWork,
    payload: MintTokenInput,
    *,
    caller: str | None,
    admin_account: str,
    policy: MintingPolicy = MintingPolicy.ADMIN,
) -> MembershipToken:
    if not policy.allows(caller, admin_account):
        raise UnauthorizedError("Caller is not allowed to mint membership tokens")
    try:
        account_id = parse_account_id(payload.account_id)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    metadata = build_metadata(payload)

    # Loading the registry locks it, so the existence check sees any concurrent mint.
    state = await uow.registry.load()
    if await uow.tokens.exists(account_id):
        raise DuplicateTokenError(
            "Token already exists for this account", details={"account_id": account_id}
        )

    issuance_seq, round_order = state.allocate_issuance()
    token = MembershipToken.create(
        account_id,
        metadata,
        issuance_seq=issuance_seq,
        minting_round=state.minting_round,
        round_order=round_order,
    )
    created = await uow.tokens.add(token)
    await uow.registry.save(state)
    await uow.commit()
    logger.info(
        "Minted membership token #%d for %s (round %d, order %d)",
        created.issuance_seq,
        created.owner_id,
        created.minting_round,
        created.round_order,
    )
    return created
