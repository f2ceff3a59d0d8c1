"""Backends answering the three read operations.

Readers raise on failure; degrading to an empty result is the
store client's job.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol

import httpx
from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.db.lazy import LazyResource
from app.models import LLMResponse, Party
from app.schemas.country import CountryResponse
from app.schemas.party import PartyResponse
from app.schemas.policy import PolicyAnalysisResponse
from app.services.transform import to_country, to_party, to_policy
from app.utils.logger import get_logger

logger = get_logger(__name__)


class Reader(Protocol):
    name: str

    async def countries(self) -> list[CountryResponse]: ...

    async def parties(self, country: str) -> list[PartyResponse]: ...

    async def policies(self, party_id: str) -> list[PolicyAnalysisResponse]: ...


class SqlReader:
    """Query a relational store (remote Postgres or embedded SQLite)."""

    def __init__(self, engine: LazyResource[AsyncEngine]):
        self.name = engine.name
        self._engine = engine

    async def _session(self) -> AsyncSession:
        return AsyncSession(await self._engine.get(), expire_on_commit=False)

    async def countries(self) -> list[CountryResponse]:
        async with await self._session() as session:
            result = await session.execute(
                select(Party.country).distinct().order_by(Party.country)
            )
            names = result.scalars().all()
        return [to_country(n) for n in names if isinstance(n, str) and n]

    async def parties(self, country: str) -> list[PartyResponse]:
        async with await self._session() as session:
            result = await session.execute(
                select(
                    Party.id,
                    Party.name,
                    Party.type,
                    Party.country,
                    Party.founded,
                    Party.website,
                    Party.econ_freedom,
                    Party.personal_freedom,
                )
                .where(Party.country == country)
                .order_by(Party.name)
            )
            rows = result.mappings().all()
        return [to_party(row) for row in rows]

    async def policies(self, party_id: str) -> list[PolicyAnalysisResponse]:
        async with await self._session() as session:
            result = await session.execute(
                select(
                    LLMResponse.policy_text.label("policy_text"),
                    LLMResponse.short_name,
                    LLMResponse.impact,
                    LLMResponse.impact_explanation,
                    LLMResponse.category,
                    LLMResponse.explanation,
                    LLMResponse.econ_freedom,
                    LLMResponse.personal_freedom,
                )
                .where(
                    LLMResponse.party_id == party_id,
                    LLMResponse.policy_text.is_not(None),
                    LLMResponse.error.is_(None),
                )
                .order_by(LLMResponse.chunk_index, LLMResponse.policy_id)
            )
            rows = result.mappings().all()

        policies = []
        for row in rows:
            policy = to_policy(row)
            if policy is not None:
                policies.append(policy)
        return policies


_countries_adapter = TypeAdapter(list[CountryResponse])
_parties_adapter = TypeAdapter(list[PartyResponse])
_policies_adapter = TypeAdapter(list[PolicyAnalysisResponse])


class HttpReader:
    """Read already-normalized records from a same-origin read API."""

    name = "http"

    def __init__(self, base_url: str, client: httpx.AsyncClient):
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        response = await self._client.get(f"{self.base_url}{path}", params=params)
        response.raise_for_status()
        return response.json()

    async def countries(self) -> list[CountryResponse]:
        return _countries_adapter.validate_python(await self._get_json("/countries"))

    async def parties(self, country: str) -> list[PartyResponse]:
        data = await self._get_json("/parties", {"country": country})
        return _parties_adapter.validate_python(data)

    async def policies(self, party_id: str) -> list[PolicyAnalysisResponse]:
        data = await self._get_json("/policies", {"partyId": party_id})
        return _policies_adapter.validate_python(data)


class FallbackReader:
    """Prefer ``primary``; answer from ``fallback`` whenever it fails."""

    def __init__(self, primary: Reader, fallback: Reader):
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def _warn(self, operation: str, exc: Exception) -> None:
        logger.warning(
            "%s via %s failed (%s), falling back to %s",
            operation, self.primary.name, exc, self.fallback.name,
        )

    async def countries(self) -> list[CountryResponse]:
        try:
            return await self.primary.countries()
        except Exception as exc:
            self._warn("countries", exc)
        return await self.fallback.countries()

    async def parties(self, country: str) -> list[PartyResponse]:
        try:
            return await self.primary.parties(country)
        except Exception as exc:
            self._warn(f"parties[{country}]", exc)
        return await self.fallback.parties(country)

    async def policies(self, party_id: str) -> list[PolicyAnalysisResponse]:
        try:
            return await self.primary.policies(party_id)
        except Exception as exc:
            self._warn(f"policies[{party_id}]", exc)
        return await self.fallback.policies(party_id)
