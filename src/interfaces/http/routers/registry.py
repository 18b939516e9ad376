from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.services.governance import GovernanceFacade
from src.interfaces.http.deps import get_facade
from src.interfaces.http.schemas.tokens import MintingRoundResponse, RegistryStatsResponse

router = APIRouter(prefix="/registry", tags=["registry"])


@router.get("/", response_model=RegistryStatsResponse)
async def registry_stats(*, facade: GovernanceFacade = Depends(get_facade)):
    stats = await facade.registry_stats()
    return RegistryStatsResponse(
        holder_count=stats.holder_count,
        quorum=stats.quorum,
        minting_round=stats.minting_round,
        round_order=stats.round_order,
        next_issuance_seq=stats.next_issuance_seq,
    )


@router.post("/rounds", response_model=MintingRoundResponse)
async def advance_minting_round(*, facade: GovernanceFacade = Depends(get_facade)):
    return MintingRoundResponse(minting_round=await facade.advance_minting_round())
