from __future__ import annotations

from fastapi import APIRouter

from app.api.countries import router as countries_router
from app.api.health import router as health_router
from app.api.parties import router as parties_router
from app.api.policies import router as policies_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(countries_router)
api_router.include_router(parties_router)
api_router.include_router(policies_router)
