from __future__ import annotations

from fastapi import Request

from app.services.store_client import StoreClient


def get_store_client(request: Request) -> StoreClient:
    return request.app.state.store_client
