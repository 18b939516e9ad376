from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


@dataclass(slots=True, frozen=True)
class TokenMetadata:
    governance_role: str
    cooperative_id: str
    title: str | None = None
    description: str | None = None
    avatar: str | None = None
    image: str | None = None
    did: str | None = None
    external_handle: str | None = None

    def with_field(self, name: str, value: str | None) -> TokenMetadata:
        return replace(self, **{name: value})


def make_unique_hash(cooperative_id: str, issuance_seq: int) -> str:
    return f"{cooperative_id}-{issuance_seq}"


@dataclass(slots=True)
class MembershipToken:
    owner_id: str
    metadata: TokenMetadata
    issuance_seq: int
    minting_round: int
    round_order: int
    unique_hash: str
    titles: list[str] = field(default_factory=list)
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        owner_id: str,
        metadata: TokenMetadata,
        *,
        issuance_seq: int,
        minting_round: int,
        round_order: int,
    ) -> MembershipToken:
        return cls(
            owner_id=owner_id,
            metadata=metadata,
            issuance_seq=issuance_seq,
            minting_round=minting_round,
            round_order=round_order,
            unique_hash=make_unique_hash(metadata.cooperative_id, issuance_seq),
            titles=[],
            issued_at=datetime.now(timezone.utc),
        )

    @property
    def governance_role(self) -> str:
        return self.metadata.governance_role

    @property
    def cooperative_id(self) -> str:
        return self.metadata.cooperative_id
