from __future__ import annotations

from enum import Enum


class MintingPolicy(str, Enum):
    ADMIN = "admin"
    OPEN = "open"

    def allows(self, caller: str | None, admin_account: str) -> bool:
        if self is MintingPolicy.OPEN:
            return caller is not None
        return caller == admin_account


class ProfilePolicy(str, Enum):
    OWNER_OR_ADMIN = "owner_or_admin"
    OPEN = "open"

    def allows(self, caller: str | None, owner: str, admin_account: str) -> bool:
        if caller is None:
            return False
        if self is ProfilePolicy.OPEN:
            return True
        return caller in {owner, admin_account}
