from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.registry_state import RegistryStateRepository
from src.domain.models.registry_state import RegistryState
from src.infrastructure.db.orm.registry_state import REGISTRY_ROW_ID, RegistryStateORM


class RegistryStateSQLAlchemyRepository(RegistryStateRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _select_locked(self) -> RegistryStateORM | None:
        stmt = (
            select(RegistryStateORM)
            .where(RegistryStateORM.id == REGISTRY_ROW_ID)
            .with_for_update()
        )
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none()

    async def _get_orm(self) -> RegistryStateORM:
        orm = await self._select_locked()
        if orm is not None:
            return orm
        initial = RegistryState()
        orm = RegistryStateORM(
            id=REGISTRY_ROW_ID,
            next_issuance_seq=initial.next_issuance_seq,
            minting_round=initial.minting_round,
            round_order=initial.round_order,
            next_proposal_id=initial.next_proposal_id,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(orm)
        except IntegrityError:
            # Another transaction created the row first.
            orm = await self._select_locked()
            if orm is None:
                raise
        return orm

    async def load(self) -> RegistryState:
        orm = await self._get_orm()
        return RegistryState(
            next_issuance_seq=orm.next_issuance_seq,
            minting_round=orm.minting_round,
            round_order=orm.round_order,
            next_proposal_id=orm.next_proposal_id,
        )

    async def save(self, state: RegistryState) -> None:
        orm = await self._get_orm()
        orm.next_issuance_seq = state.next_issuance_seq
        orm.minting_round = state.minting_round
        orm.round_order = state.round_order
        orm.next_proposal_id = state.next_proposal_id
        await self.session.flush()
