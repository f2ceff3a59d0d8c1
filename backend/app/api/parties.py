from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store_client
from app.schemas.party import PartyResponse
from app.services.store_client import StoreClient
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/parties", tags=["parties"])


@router.get("", response_model=list[PartyResponse])
async def list_parties(
    country: Optional[str] = None,
    client: StoreClient = Depends(get_store_client),
):
    """Parties of one country, alphabetical by name."""
    if not country:
        raise HTTPException(
            status_code=400, detail='Missing required query parameter "country"'
        )
    try:
        return await client.list_parties(country)
    except Exception:
        logger.exception("Error in /parties")
        raise HTTPException(status_code=500, detail="Internal Server Error")
