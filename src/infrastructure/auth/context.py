from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class AuthContext:
    """Identity of the account making the current request."""

    account_id: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls()

    def current_caller(self) -> str | None:
        return self.account_id
