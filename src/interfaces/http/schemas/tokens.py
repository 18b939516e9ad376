from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.domain.value_objects.account_id import parse_account_id


class MintTokenRequest(BaseModel):
    account_id: str
    cooperative_id: str = Field(min_length=1, max_length=128)
    governance_role: str = Field(default="Member", min_length=1, max_length=64)
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    avatar: str | None = Field(default=None, max_length=1024)
    image: str | None = Field(default=None, max_length=1024)
    did: str | None = Field(default=None, max_length=255)

    @field_validator("account_id")
    @classmethod
    def validate_account_id(cls, value: str) -> str:
        return parse_account_id(value)


class TokenMetadataResponse(BaseModel):
    governance_role: str
    cooperative_id: str
    title: str | None
    description: str | None
    avatar: str | None
    image: str | None
    did: str | None
    external_handle: str | None


class TokenResponse(BaseModel):
    owner_id: str
    metadata: TokenMetadataResponse
    issuance_seq: int
    minting_round: int
    round_order: int
    unique_hash: str
    titles: list[str]
    issued_at: datetime


class HolderResponse(BaseModel):
    account_id: str
    is_holder: bool


class RoleResponse(BaseModel):
    account_id: str
    governance_role: str | None


class ProfileFieldUpdate(BaseModel):
    value: str | None = None


class TitleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)


class ExternalHandleUpdate(BaseModel):
    handle: str = Field(min_length=1, max_length=255)


class TransferRequest(BaseModel):
    from_account: str
    to_account: str


class OwnershipProofResponse(BaseModel):
    account_id: str
    unique_hash: str
    digest: str
    signature: str
    algorithm: str


class ProofVerificationResponse(BaseModel):
    valid: bool


class RegistryStatsResponse(BaseModel):
    holder_count: int
    quorum: int
    minting_round: int
    round_order: int
    next_issuance_seq: int


class MintingRoundResponse(BaseModel):
    minting_round: int
