from __future__ import annotations

from typing import Protocol

from src.domain.models.registry_state import RegistryState


class RegistryStateRepository(Protocol):
    async def load(self) -> RegistryState: ...

    async def save(self, state: RegistryState) -> None: ...
