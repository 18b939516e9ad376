from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, DuplicateTokenError, ValidationError
from src.application.interfaces.repositories.membership_tokens import (
    MembershipTokenRepository,
)
from src.domain.models.membership_token import MembershipToken, TokenMetadata
from src.infrastructure.db.orm.membership_token import MembershipTokenORM

# Metadata columns that may be rewritten after minting.
MUTABLE_FIELDS = frozenset(
    {"title", "description", "avatar", "image", "did", "external_handle"}
)


class MembershipTokensSQLAlchemyRepository(MembershipTokenRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MembershipTokenORM) -> MembershipToken:
        return MembershipToken(
            owner_id=orm.owner_id,
            metadata=TokenMetadata(
                governance_role=orm.governance_role,
                cooperative_id=orm.cooperative_id,
                title=orm.title,
                description=orm.description,
                avatar=orm.avatar,
                image=orm.image,
                did=orm.did,
                external_handle=orm.external_handle,
            ),
            issuance_seq=orm.issuance_seq,
            minting_round=orm.minting_round,
            round_order=orm.round_order,
            unique_hash=orm.unique_hash,
            titles=list(orm.titles or []),
            issued_at=orm.issued_at,
        )

    async def _get_orm(self, owner_id: str) -> MembershipTokenORM | None:
        stmt = select(MembershipTokenORM).where(MembershipTokenORM.owner_id == owner_id)
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none()

    async def add(self, token: MembershipToken) -> MembershipToken:
        meta = token.metadata
        orm = MembershipTokenORM(
            owner_id=token.owner_id,
            issuance_seq=token.issuance_seq,
            minting_round=token.minting_round,
            round_order=token.round_order,
            unique_hash=token.unique_hash,
            governance_role=meta.governance_role,
            cooperative_id=meta.cooperative_id,
            title=meta.title,
            description=meta.description,
            avatar=meta.avatar,
            image=meta.image,
            did=meta.did,
            external_handle=meta.external_handle,
            titles=list(token.titles),
            issued_at=token.issued_at,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(orm)
        except IntegrityError as exc:
            # A concurrent mint for the same account won the insert.
            if await self.exists(token.owner_id):
                raise DuplicateTokenError(
                    "Token already exists for this account",
                    details={"account_id": token.owner_id},
                ) from exc
            raise ConflictError("Failed to mint membership token") from exc
        return self._to_domain(orm)

    async def get(self, owner_id: str) -> MembershipToken | None:
        orm = await self._get_orm(owner_id)
        return self._to_domain(orm) if orm else None

    async def exists(self, owner_id: str) -> bool:
        stmt = select(MembershipTokenORM.owner_id).where(MembershipTokenORM.owner_id == owner_id)
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none() is not None

    async def count(self) -> int:
        res = await self.session.execute(select(func.count()).select_from(MembershipTokenORM))
        return res.scalar() or 0

    async def list_by_cooperative(self, cooperative_id: str) -> list[MembershipToken]:
        stmt = (
            select(MembershipTokenORM)
            .where(MembershipTokenORM.cooperative_id == cooperative_id)
            .order_by(MembershipTokenORM.issuance_seq)
        )
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def set_metadata_field(self, owner_id: str, field: str, value: str | None) -> bool:
        if field not in MUTABLE_FIELDS:
            raise ValidationError("Unknown token field", details={"field": field})
        stmt = (
            update(MembershipTokenORM)
            .where(MembershipTokenORM.owner_id == owner_id)
            .values({field: value})
        )
        res = await self.session.execute(stmt)
        return res.rowcount > 0

    async def append_title(self, owner_id: str, title: str) -> bool:
        orm = await self._get_orm(owner_id)
        if orm is None:
            return False
        orm.titles = [*(orm.titles or []), title]
        await self.session.flush()
        return True

    async def remove(self, owner_id: str) -> MembershipToken | None:
        orm = await self._get_orm(owner_id)
        if orm is None:
            return None
        token = self._to_domain(orm)
        await self.session.delete(orm)
        await self.session.flush()
        return token
