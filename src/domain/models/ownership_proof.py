from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class OwnershipProof:
    account_id: str
    unique_hash: str
    digest: str
    signature: str
    algorithm: str

    @staticmethod
    def message_for(account_id: str, unique_hash: str) -> bytes:
        return f"{account_id}:{unique_hash}".encode("utf-8")
