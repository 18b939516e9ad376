"""Read-only registry lookups. Absence is reported as ``None``/``False``."""

from __future__ import annotations

from dataclasses import dataclass

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.membership_token import MembershipToken, TokenMetadata
from src.domain.models.proposal import quorum_for


@dataclass(slots=True)
class RegistryStats:
    holder_count: int
    quorum: int
    minting_round: int
    round_order: int
    next_issuance_seq: int


async def get_token(uow: UnitOfWork, account_id: str) -> MembershipToken | None:
    return await uow.tokens.get(account_id)


async def is_holder(uow: UnitOfWork, account_id: str) -> bool:
    return await uow.tokens.exists(account_id)


async def metadata_of(uow: UnitOfWork, account_id: str) -> TokenMetadata | None:
    token = await uow.tokens.get(account_id)
    return token.metadata if token else None


async def role_of(uow: UnitOfWork, account_id: str) -> str | None:
    token = await uow.tokens.get(account_id)
    return token.governance_role if token else None


async def list_cohort(uow: UnitOfWork, cooperative_id: str) -> list[MembershipToken]:
    return await uow.tokens.list_by_cooperative(cooperative_id)


async def registry_stats(uow: UnitOfWork) -> RegistryStats:
    holders = await uow.tokens.count()
    state = await uow.registry.load()
    return RegistryStats(
        holder_count=holders,
        quorum=quorum_for(holders),
        minting_round=state.minting_round,
        round_order=state.round_order,
        next_issuance_seq=state.next_issuance_seq,
    )
