from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.types import StringList


class MembershipTokenORM(Base):
    __tablename__ = "membership_tokens"

    owner_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    issuance_seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    minting_round: Mapped[int] = mapped_column(Integer, nullable=False)
    round_order: Mapped[int] = mapped_column(Integer, nullable=False)
    unique_hash: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    governance_role: Mapped[str] = mapped_column(String(64), nullable=False)
    cooperative_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    did: Mapped[str | None] = mapped_column(String(255), nullable=True)
    external_handle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    titles: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
