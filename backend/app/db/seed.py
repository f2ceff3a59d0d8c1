from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.engines import sqlite_url
from app.models import Base, LLMResponse, Party

DATA_DIR = Path(__file__).parent.parent / "data"
SAMPLE_DATASET = DATA_DIR / "sample_dataset.json"


def load_dataset(path: Union[str, Path] = SAMPLE_DATASET) -> dict[str, list[dict[str, Any]]]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _llm_response_kwargs(row: dict[str, Any]) -> dict[str, Any]:
    kwargs = dict(row)
    # The stored column is called "policy"
    if "policy" in kwargs:
        kwargs["policy_text"] = kwargs.pop("policy")
    category = kwargs.get("category")
    if category is not None and not isinstance(category, str):
        kwargs["category"] = json.dumps(category, ensure_ascii=False)
    return kwargs


async def seed_parties(session: AsyncSession, parties: list[dict[str, Any]]) -> None:
    existing = (await session.execute(select(Party.id))).scalars().all()
    if existing:
        return

    for p in parties:
        session.add(Party(**p))
    await session.commit()


async def seed_llm_responses(session: AsyncSession, rows: list[dict[str, Any]]) -> None:
    existing = (await session.execute(select(LLMResponse.id))).scalars().all()
    if existing:
        return

    for r in rows:
        session.add(LLMResponse(**_llm_response_kwargs(r)))
    await session.commit()


async def seed_all(session: AsyncSession, dataset: dict[str, list[dict[str, Any]]]) -> None:
    await seed_parties(session, dataset.get("parties", []))
    await seed_llm_responses(session, dataset.get("llm_responses", []))


async def build_embedded_store(
    path: Union[str, Path], dataset: dict[str, list[dict[str, Any]]]
) -> Path:
    """Create (or top up) an embedded store file holding ``dataset``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(sqlite_url(path, read_only=False), echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as session:
            await seed_all(session, dataset)
    finally:
        await engine.dispose()
    return path
