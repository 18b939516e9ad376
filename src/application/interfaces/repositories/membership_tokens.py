from __future__ import annotations

from typing import Protocol

from src.domain.models.membership_token import MembershipToken


class MembershipTokenRepository(Protocol):
    async def add(self, token: MembershipToken) -> MembershipToken: ...

    async def get(self, owner_id: str) -> MembershipToken | None: ...

    async def exists(self, owner_id: str) -> bool: ...

    async def count(self) -> int: ...

    async def list_by_cooperative(self, cooperative_id: str) -> list[MembershipToken]: ...

    async def set_metadata_field(self, owner_id: str, field: str, value: str | None) -> bool: ...

    async def append_title(self, owner_id: str, title: str) -> bool: ...

    async def remove(self, owner_id: str) -> MembershipToken | None: ...
