from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import (
    AlreadyVotedError,
    ConflictError,
    NotFoundError,
    ProposalNotActiveError,
)
from src.application.interfaces.repositories.proposals import ProposalRepository
from src.domain.models.proposal import Proposal
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.db.orm.proposal import ProposalORM, ProposalVoteORM


class ProposalsSQLAlchemyRepository(ProposalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ProposalORM) -> Proposal:
        return Proposal(
            id=orm.id,
            title=orm.title,
            description=orm.description,
            proposer=orm.proposer,
            votes_for=orm.votes_for,
            votes_against=orm.votes_against,
            voters=[v.account_id for v in orm.votes],
            status=orm.status,
            created_at=orm.created_at,
            resolved_at=orm.resolved_at,
        )

    async def add(self, proposal: Proposal) -> Proposal:
        orm = ProposalORM(
            id=proposal.id,
            title=proposal.title,
            description=proposal.description,
            proposer=proposal.proposer,
            votes_for=proposal.votes_for,
            votes_against=proposal.votes_against,
            status=proposal.status,
            created_at=proposal.created_at,
            resolved_at=proposal.resolved_at,
            votes=[],
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create proposal") from exc
        return self._to_domain(orm)

    async def get(self, proposal_id: int) -> Proposal | None:
        stmt = select(ProposalORM).where(ProposalORM.id == proposal_id)
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_for_update(self, proposal_id: int) -> Proposal | None:
        stmt = select(ProposalORM).where(ProposalORM.id == proposal_id).with_for_update()
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_all(self) -> list[Proposal]:
        res = await self.session.execute(select(ProposalORM).order_by(ProposalORM.id))
        return [self._to_domain(x) for x in res.scalars().all()]

    async def record_vote(self, proposal_id: int, voter: str, in_favor: bool) -> Proposal:
        column = "votes_for" if in_favor else "votes_against"
        # Incremented in SQL; only an active proposal accepts the ballot.
        bump = (
            update(ProposalORM)
            .where(ProposalORM.id == proposal_id, ProposalORM.status == ProposalStatus.ACTIVE)
            .values({column: getattr(ProposalORM, column) + 1})
            .execution_options(synchronize_session=False)
        )
        res = await self.session.execute(bump)
        if res.rowcount == 0:
            if await self.session.get(ProposalORM, proposal_id) is None:
                raise NotFoundError("Proposal not found", details={"proposal_id": proposal_id})
            raise ProposalNotActiveError(
                "Proposal is not active", details={"proposal_id": proposal_id}
            )

        tally = await self.session.execute(
            select(ProposalORM.votes_for, ProposalORM.votes_against).where(
                ProposalORM.id == proposal_id
            )
        )
        votes_for, votes_against = tally.one()
        try:
            await self.session.execute(
                insert(ProposalVoteORM).values(
                    proposal_id=proposal_id,
                    account_id=voter,
                    in_favor=in_favor,
                    seq=votes_for + votes_against,
                )
            )
        except IntegrityError as exc:
            raise AlreadyVotedError(
                "Account has already voted",
                details={"proposal_id": proposal_id, "account_id": voter},
            ) from exc

        orm = await self.session.get(ProposalORM, proposal_id, populate_existing=True)
        return self._to_domain(orm)

    async def mark_resolved(self, proposal: Proposal) -> None:
        stmt = (
            update(ProposalORM)
            .where(ProposalORM.id == proposal.id, ProposalORM.status == ProposalStatus.ACTIVE)
            .values(status=proposal.status, resolved_at=proposal.resolved_at)
            .execution_options(synchronize_session=False)
        )
        res = await self.session.execute(stmt)
        if res.rowcount == 0:
            raise ProposalNotActiveError(
                "Proposal is not active", details={"proposal_id": proposal.id}
            )
