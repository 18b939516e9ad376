from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from src.application.errors import NotFoundError
from src.application.services.governance import GovernanceFacade
from src.application.use_cases.membership.mint_token import MintTokenInput
from src.domain.models.membership_token import MembershipToken, TokenMetadata
from src.domain.models.ownership_proof import OwnershipProof
from src.domain.value_objects.profile_field import ProfileField
from src.interfaces.http.deps import get_facade
from src.interfaces.http.schemas.tokens import (
    ExternalHandleUpdate,
    HolderResponse,
    MintTokenRequest,
    OwnershipProofResponse,
    ProfileFieldUpdate,
    ProofVerificationResponse,
    RoleResponse,
    TitleCreate,
    TokenMetadataResponse,
    TokenResponse,
    TransferRequest,
)

router = APIRouter(prefix="/tokens", tags=["tokens"])


def _metadata_response(metadata: TokenMetadata) -> TokenMetadataResponse:
    return TokenMetadataResponse(
        governance_role=metadata.governance_role,
        cooperative_id=metadata.cooperative_id,
        title=metadata.title,
        description=metadata.description,
        avatar=metadata.avatar,
        image=metadata.image,
        did=metadata.did,
        external_handle=metadata.external_handle,
    )


def _token_response(token: MembershipToken) -> TokenResponse:
    return TokenResponse(
        owner_id=token.owner_id,
        metadata=_metadata_response(token.metadata),
        issuance_seq=token.issuance_seq,
        minting_round=token.minting_round,
        round_order=token.round_order,
        unique_hash=token.unique_hash,
        titles=list(token.titles),
        issued_at=token.issued_at,
    )


@router.post("/", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def mint_token(
    payload: MintTokenRequest,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    token = await facade.mint(MintTokenInput(**payload.model_dump()))
    return _token_response(token)


@router.get("/", response_model=list[TokenResponse])
async def list_cohort(
    *,
    cooperative_id: str = Query(..., min_length=1),
    facade: GovernanceFacade = Depends(get_facade),
):
    tokens = await facade.list_cohort(cooperative_id)
    return [_token_response(t) for t in tokens]


@router.post("/transfer")
async def transfer_token(
    payload: TransferRequest,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    facade.transfer(payload.from_account, payload.to_account)


@router.post("/proofs/verify", response_model=ProofVerificationResponse)
async def verify_ownership_proof(
    payload: OwnershipProofResponse,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    proof = OwnershipProof(**payload.model_dump())
    return ProofVerificationResponse(valid=facade.verify_ownership_proof(proof))


@router.get("/{account_id}", response_model=TokenResponse)
async def get_token(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    token = await facade.get_token(account_id)
    if token is None:
        raise NotFoundError("Token not found", details={"account_id": account_id})
    return _token_response(token)


@router.delete("/{account_id}", response_model=TokenResponse)
async def revoke_token(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    return _token_response(await facade.revoke(account_id))


@router.get("/{account_id}/holder", response_model=HolderResponse)
async def is_holder(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    return HolderResponse(account_id=account_id, is_holder=await facade.is_holder(account_id))


@router.get("/{account_id}/metadata", response_model=TokenMetadataResponse | None)
async def token_metadata(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    metadata = await facade.token_metadata(account_id)
    return _metadata_response(metadata) if metadata else None


@router.get("/{account_id}/role", response_model=RoleResponse)
async def governance_role(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    role = await facade.governance_role(account_id)
    return RoleResponse(account_id=account_id, governance_role=role)


@router.put("/{account_id}/profile/{field}", status_code=status.HTTP_204_NO_CONTENT)
async def update_profile_field(
    account_id: str,
    field: ProfileField,
    payload: ProfileFieldUpdate,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    await facade.update_profile_field(account_id, field, payload.value)
    return None


@router.post("/{account_id}/titles", status_code=status.HTTP_204_NO_CONTENT)
async def add_title(
    account_id: str,
    payload: TitleCreate,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    await facade.add_title(account_id, payload.title)
    return None


@router.put("/{account_id}/external-handle", status_code=status.HTTP_204_NO_CONTENT)
async def link_external_handle(
    account_id: str,
    payload: ExternalHandleUpdate,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    await facade.link_external_handle(account_id, payload.handle)
    return None


@router.post("/{account_id}/proof", response_model=OwnershipProofResponse)
async def issue_ownership_proof(
    account_id: str,
    *,
    facade: GovernanceFacade = Depends(get_facade),
):
    proof = await facade.issue_ownership_proof(account_id)
    return OwnershipProofResponse(
        account_id=proof.account_id,
        unique_hash=proof.unique_hash,
        digest=proof.digest,
        signature=proof.signature,
        algorithm=proof.algorithm,
    )
