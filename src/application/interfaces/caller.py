from __future__ import annotations

from typing import Protocol


class CallerIdentity(Protocol):
    def current_caller(self) -> str | None: ...
