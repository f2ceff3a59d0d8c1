from __future__ import annotations

from typing import Awaitable, Callable, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import StoreConfig, StoreKind
from app.db.engines import create_embedded_engine, create_remote_engine
from app.db.lazy import LazyResource
from app.schemas.country import CountryResponse
from app.schemas.party import PartyResponse
from app.schemas.policy import PolicyAnalysisResponse, PositionEstimateResponse
from app.services.ideology import classify, estimate_position
from app.services.readers import FallbackReader, HttpReader, Reader, SqlReader
from app.utils.logger import get_logger

logger = get_logger(__name__)

EngineFactory = Callable[[StoreKind, StoreConfig], Awaitable[AsyncEngine]]


async def default_engine_factory(kind: StoreKind, config: StoreConfig) -> AsyncEngine:
    if kind is StoreKind.REMOTE:
        return await create_remote_engine(config)
    return await create_embedded_engine(config)


async def _dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()


class StoreClient:
    """Uniform read access to parties and policy analyses.

    Construct one per process (or per test) and ``close()`` it on shutdown.
    Backing stores are connected lazily, once, on first use.
    """

    def __init__(
        self,
        config: StoreConfig,
        *,
        engine_factory: Optional[EngineFactory] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._engine_factory = engine_factory or default_engine_factory
        self._resources: dict[str, LazyResource[AsyncEngine]] = {}
        self._http_client: Optional[httpx.AsyncClient] = None
        self._owns_http_client = False

        if config.kind is StoreKind.REMOTE:
            self._reader: Reader = SqlReader(self._engine_resource(StoreKind.REMOTE))
        elif config.kind is StoreKind.EMBEDDED:
            self._reader = SqlReader(self._engine_resource(StoreKind.EMBEDDED))
        else:
            if http_client is None:
                http_client = httpx.AsyncClient(timeout=config.http_timeout)
                self._owns_http_client = True
            self._http_client = http_client
            self._reader = FallbackReader(
                HttpReader(config.api_base_url or "", http_client),
                SqlReader(self._engine_resource(StoreKind.EMBEDDED)),
            )

    def _engine_resource(self, kind: StoreKind) -> LazyResource[AsyncEngine]:
        async def factory() -> AsyncEngine:
            return await self._engine_factory(kind, self.config)

        resource = LazyResource(kind.value, factory, closer=_dispose_engine)
        self._resources[kind.value] = resource
        return resource

    # --- raising reads ---

    async def fetch_countries(self) -> list[CountryResponse]:
        return await self._reader.countries()

    async def fetch_parties(self, country: str) -> list[PartyResponse]:
        return await self._reader.parties(country)

    async def fetch_policies(self, party_id: str) -> list[PolicyAnalysisResponse]:
        return await self._reader.policies(party_id)

    # --- degrading reads ---

    async def list_countries(self) -> list[CountryResponse]:
        try:
            return await self.fetch_countries()
        except Exception:
            logger.exception("Error fetching countries from %s store", self._reader.name)
            return []

    async def list_parties(self, country: str) -> list[PartyResponse]:
        try:
            return await self.fetch_parties(country)
        except Exception:
            logger.exception(
                "Error fetching parties for %s from %s store", country, self._reader.name
            )
            return []

    async def list_policies(self, party_id: str) -> list[PolicyAnalysisResponse]:
        try:
            return await self.fetch_policies(party_id)
        except Exception:
            logger.exception(
                "Error fetching policies for party %s from %s store", party_id, self._reader.name
            )
            return []

    async def estimate_position(self, party_id: str) -> PositionEstimateResponse:
        policies = await self.list_policies(party_id)
        position = estimate_position((p.impact, p.categories) for p in policies)
        if position is None:
            return PositionEstimateResponse(party_id=party_id, policy_count=len(policies))

        economic, personal = position
        return PositionEstimateResponse(
            party_id=party_id,
            econ_freedom=economic,
            personal_freedom=personal,
            ideology=classify(economic, personal),
            policy_count=len(policies),
        )

    def status(self) -> dict:
        return {
            "kind": self.config.kind.value,
            "states": {name: r.state.value for name, r in self._resources.items()},
        }

    async def close(self) -> None:
        for resource in self._resources.values():
            await resource.dispose()
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
