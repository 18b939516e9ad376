from __future__ import annotations

from typing import Protocol


class Signer(Protocol):
    algorithm: str

    def hash(self, data: bytes) -> str: ...

    def sign(self, data: bytes) -> str: ...

    def verify(self, signature: str, data: bytes) -> bool: ...
