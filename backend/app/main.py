from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.config import resolve_store_config, settings
from app.services.store_client import StoreClient
from app.utils.logger import configure_logging, get_logger

configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = resolve_store_config(settings)
    logger.info("Serving compass data from %s store", config.kind.value)
    app.state.store_client = StoreClient(config)
    yield
    await app.state.store_client.close()


app = FastAPI(
    title="Party Compass API",
    description="Read API for political parties on the economic x personal freedom compass",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)
