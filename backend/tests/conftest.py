"""Shared fixtures: temporary embedded stores built from the sample dataset."""
from __future__ import annotations

import copy

import pytest

from app.config import StoreConfig, StoreKind
from app.db.seed import build_embedded_store, load_dataset
from app.services.store_client import StoreClient

# Rows exercising the skip/exclude/degrade paths. Inserted before the
# sample rows so ordering can't fall back on insertion order.
EXTRA_LLM_RESPONSES = [
    {
        "party_id": "de-cdu",
        "country": "Germany",
        "chunk_index": 2,
        "policy_id": 1,
        "policy": "Raise the retirement age gradually to 68.",
        "short_name": "Pension reform",
        "impact": "low",
        "impact_explanation": None,
        "category": ["moderately right"],
        "explanation": "",
        "econ_freedom": 1.5,
        "personal_freedom": None,
        "weight": 1.0,
        "error": None,
    },
    {
        "party_id": "de-cdu",
        "country": "Germany",
        "chunk_index": 0,
        "policy_id": 3,
        "policy": "Ban combustion engines by 2035.",
        "short_name": "Combustion ban",
        "impact": "high",
        "impact_explanation": None,
        "category": ["strongly authoritarian"],
        "explanation": None,
        "econ_freedom": -2.0,
        "personal_freedom": -4.0,
        "weight": 1.0,
        "error": "rate limited",
    },
    {
        "party_id": "de-cdu",
        "country": "Germany",
        "chunk_index": 1,
        "policy_id": 2,
        "policy": "Untitled fragment.",
        "short_name": "",
        "impact": "medium",
        "impact_explanation": None,
        "category": None,
        "explanation": None,
        "econ_freedom": None,
        "personal_freedom": None,
        "weight": None,
        "error": None,
    },
    {
        "party_id": "de-linke",
        "country": "Germany",
        "chunk_index": 0,
        "policy_id": 1,
        "policy": "Nationalise the railway network.",
        "short_name": "Rail nationalisation",
        "impact": "critical",
        "impact_explanation": "Restructures transport.",
        "category": '["moderately right", "not-json-parseable',
        "explanation": None,
        "econ_freedom": -5.0,
        "personal_freedom": None,
        "weight": 1.0,
        "error": None,
    },
]


@pytest.fixture
def dataset():
    sample = copy.deepcopy(load_dataset())
    return {
        "parties": sample["parties"],
        "llm_responses": copy.deepcopy(EXTRA_LLM_RESPONSES) + sample["llm_responses"],
    }


@pytest.fixture
async def embedded_db(tmp_path, dataset):
    return await build_embedded_store(tmp_path / "data.db", dataset)


@pytest.fixture
def embedded_config(embedded_db):
    return StoreConfig(kind=StoreKind.EMBEDDED, sqlite_path=str(embedded_db))


@pytest.fixture
async def store_client(embedded_config):
    client = StoreClient(embedded_config)
    yield client
    await client.close()


@pytest.fixture
def no_default_store(tmp_path, monkeypatch):
    """Hide data/data.db files that might exist in the working tree."""
    from app.db import engines

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(engines, "PROJECT_ROOT", tmp_path / "project")
