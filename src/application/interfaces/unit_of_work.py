from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.membership_tokens import (
    MembershipTokenRepository,
)
from src.application.interfaces.repositories.proposals import ProposalRepository
from src.application.interfaces.repositories.registry_state import RegistryStateRepository


class UnitOfWork(Protocol):
    tokens: MembershipTokenRepository
    proposals: ProposalRepository
    registry: RegistryStateRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
