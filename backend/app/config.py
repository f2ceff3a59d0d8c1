from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings

from app.errors import StoreConfigError


class Settings(BaseSettings):
    # Remote relational store (absent => embedded store)
    DATABASE_URL: str = ""

    # Embedded store file override
    SQLITE_DB_PATH: str = ""

    # Explicit store selection: remote / embedded / http-with-fallback
    STORE_KIND: str = ""

    # Same-origin read API, used by http-with-fallback
    DATA_API_BASE_URL: str = ""
    HTTP_TIMEOUT: float = 10.0

    # Remote connection probe attempts
    MAX_RETRIES: int = 3

    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api/v1"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:8080"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    model_config = {
        "env_file": [".env", "../.env"],
        "env_file_encoding": "utf-8",
    }


settings = Settings()


class StoreKind(str, enum.Enum):
    REMOTE = "remote"
    EMBEDDED = "embedded"
    HTTP_WITH_FALLBACK = "http-with-fallback"


@dataclass(frozen=True)
class StoreConfig:
    kind: StoreKind
    database_url: Optional[str] = None
    sqlite_path: Optional[str] = None
    api_base_url: Optional[str] = None
    http_timeout: float = 10.0
    max_retries: int = 3


def normalize_database_url(url: str) -> str:
    """Rewrite plain Postgres URLs to the asyncpg driver scheme."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def resolve_store_config(source: Settings) -> StoreConfig:
    """Decide once, at startup, which backing store answers read operations."""
    raw_kind = source.STORE_KIND.strip().lower()
    if raw_kind:
        try:
            kind = StoreKind(raw_kind)
        except ValueError:
            raise StoreConfigError(
                f"Unknown STORE_KIND {source.STORE_KIND!r}; "
                f"expected one of {', '.join(k.value for k in StoreKind)}"
            ) from None
    elif source.DATABASE_URL:
        kind = StoreKind.REMOTE
    else:
        kind = StoreKind.EMBEDDED

    if kind is StoreKind.REMOTE and not source.DATABASE_URL:
        raise StoreConfigError("STORE_KIND=remote requires DATABASE_URL")
    if kind is StoreKind.HTTP_WITH_FALLBACK and not source.DATA_API_BASE_URL:
        raise StoreConfigError("STORE_KIND=http-with-fallback requires DATA_API_BASE_URL")

    return StoreConfig(
        kind=kind,
        database_url=normalize_database_url(source.DATABASE_URL) if source.DATABASE_URL else None,
        sqlite_path=source.SQLITE_DB_PATH or None,
        api_base_url=source.DATA_API_BASE_URL.rstrip("/") or None,
        http_timeout=source.HTTP_TIMEOUT,
        max_retries=source.MAX_RETRIES,
    )
