from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.db.base import Base


class ProposalORM(Base):
    __tablename__ = "proposals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    proposer: Mapped[str] = mapped_column(String(64), nullable=False)
    votes_for: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    votes_against: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[ProposalStatus] = mapped_column(
        Enum(ProposalStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProposalStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    votes: Mapped[list[ProposalVoteORM]] = relationship(
        back_populates="proposal",
        lazy="selectin",
        order_by="ProposalVoteORM.seq",
        cascade="all, delete-orphan",
    )


class ProposalVoteORM(Base):
    __tablename__ = "proposal_votes"

    proposal_id: Mapped[int] = mapped_column(
        ForeignKey("proposals.id", ondelete="CASCADE"), primary_key=True
    )
    account_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    in_favor: Mapped[bool] = mapped_column(Boolean, nullable=False)
    # Position of the vote within the proposal; keeps voters in casting order.
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    cast_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    proposal: Mapped[ProposalORM] = relationship(back_populates="votes")
