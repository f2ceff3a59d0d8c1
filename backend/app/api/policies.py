from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_store_client
from app.schemas.policy import PolicyAnalysisResponse, PositionEstimateResponse
from app.services.store_client import StoreClient
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/policies", tags=["policies"])

_MISSING_PARTY_ID = 'Missing required query parameter "partyId"'


@router.get("", response_model=list[PolicyAnalysisResponse])
async def list_policies(
    party_id: Optional[str] = Query(None, alias="partyId"),
    client: StoreClient = Depends(get_store_client),
):
    """Policy analyses of one party in document order."""
    if not party_id:
        raise HTTPException(status_code=400, detail=_MISSING_PARTY_ID)
    try:
        return await client.list_policies(party_id)
    except Exception:
        logger.exception("Error in /policies")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/position", response_model=PositionEstimateResponse)
async def estimate_party_position(
    party_id: Optional[str] = Query(None, alias="partyId"),
    client: StoreClient = Depends(get_store_client),
):
    """Compass position implied by the categories of a party's policies."""
    if not party_id:
        raise HTTPException(status_code=400, detail=_MISSING_PARTY_ID)
    try:
        return await client.estimate_position(party_id)
    except Exception:
        logger.exception("Error in /policies/position")
        raise HTTPException(status_code=500, detail="Internal Server Error")
