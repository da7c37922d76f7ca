from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from claim_status.dependencies import get_claim_repository, get_summarization_service
from claim_status.errors import ClaimNotFoundError
from claim_status.schemas import Claim, ClaimSummaryResponse
from claim_status.services.claim_repository import ClaimRepository
from claim_status.services.summarization_service import SummarizationService

router = APIRouter()


@router.get("", response_model=List[Claim])
async def list_claims(repository: ClaimRepository = Depends(get_claim_repository)):
    """Returns every claim in dataset order."""
    return await repository.get_all_claims()


@router.get("/{claim_id}", response_model=Claim)
async def get_claim(claim_id: int, repository: ClaimRepository = Depends(get_claim_repository)):
    claim = await repository.get_claim(claim_id)

    if claim is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="claim not found",
        )
    return claim


@router.post("/{claim_id}/summarize", response_model=ClaimSummaryResponse)
async def summarize_claim(
    claim_id: int,
    service: SummarizationService = Depends(get_summarization_service),
):
    """
    Summarizes a claim's notes for the general, customer and adjuster audiences.

    Provider failures are absorbed by the service into placeholder text,
    so the only error surfaced here is an unknown claim id.
    """
    try:
        return await service.summarize(claim_id)
    except ClaimNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="claim not found",
        )
