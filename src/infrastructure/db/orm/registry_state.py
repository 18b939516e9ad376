from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base

REGISTRY_ROW_ID = 1


class RegistryStateORM(Base):
    __tablename__ = "registry_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=REGISTRY_ROW_ID)
    next_issuance_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    minting_round: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    round_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    next_proposal_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
