from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store_client
from app.schemas.country import CountryResponse
from app.services.store_client import StoreClient
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[CountryResponse])
async def list_countries(client: StoreClient = Depends(get_store_client)):
    try:
        return await client.list_countries()
    except Exception:
        logger.exception("Error in /countries")
        raise HTTPException(status_code=500, detail="Internal Server Error")
