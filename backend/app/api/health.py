from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_store_client
from app.schemas.health import HealthResponse
from app.services.store_client import StoreClient

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(client: StoreClient = Depends(get_store_client)):
    return {"status": "ok", "store": client.status()}
