from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import quote

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from app.config import StoreConfig
from app.errors import StoreConfigError, StoreUnavailableError
from app.utils.logger import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

_LOCAL_HOSTS = ("localhost", "127.0.0.1")
_LIBPQ_ONLY_PARAMS = ("sslmode", "channel_binding")
_SSL_MODES = ("disable", "allow", "prefer", "require", "verify-ca", "verify-full")


async def _probe(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


def remote_engine_args(url: str) -> tuple[URL, dict]:
    """Split libpq-only query parameters off a URL into asyncpg connect args."""
    parsed = make_url(url)
    if not parsed.drivername.startswith("postgresql"):
        return parsed, {}

    sslmode = parsed.query.get("sslmode")
    if isinstance(sslmode, tuple):
        sslmode = sslmode[-1]
    parsed = parsed.difference_update_query(_LIBPQ_ONLY_PARAMS)

    if sslmode:
        sslmode = sslmode.lower()
        if sslmode not in _SSL_MODES:
            raise StoreConfigError(f"Unsupported sslmode {sslmode!r} in DATABASE_URL")
        return parsed, {"ssl": False if sslmode == "disable" else sslmode}
    # Local development servers usually run without TLS
    if (parsed.host or "").lower() in _LOCAL_HOSTS:
        return parsed, {"ssl": False}
    return parsed, {"ssl": "require"}


async def create_remote_engine(config: StoreConfig) -> AsyncEngine:
    if not config.database_url:
        raise StoreConfigError("DATABASE_URL is not defined")

    url, connect_args = remote_engine_args(config.database_url)
    engine = create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    host = url.host or "local"
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, config.max_retries)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                await _probe(engine)
    except Exception as exc:
        await engine.dispose()
        raise StoreUnavailableError(f"Could not connect to remote store at {host}") from exc

    logger.info("Remote store ready (%s)", host)
    return engine


def sqlite_candidates(explicit: Optional[str] = None) -> list[Path]:
    candidates = [
        Path.cwd() / "data" / "data.db",
        Path.cwd() / "public" / "data.db",
        PROJECT_ROOT / "data" / "data.db",
        PROJECT_ROOT / "public" / "data.db",
    ]
    if explicit:
        candidates.insert(0, Path(explicit))
    return candidates


def resolve_sqlite_path(explicit: Optional[str] = None) -> Path:
    for candidate in sqlite_candidates(explicit):
        if candidate.is_file():
            return candidate
    raise StoreConfigError(
        "Unable to locate local SQLite database file. "
        "Provide SQLITE_DB_PATH or place data.db in data/ or public/."
    )


def sqlite_url(path: Path, read_only: bool = True) -> URL:
    resolved = str(path.resolve())
    if read_only:
        # SQLite URI filenames are percent-decoded, so ?, # and % must be quoted
        return URL.create(
            "sqlite+aiosqlite",
            database=f"file:{quote(resolved)}",
            query={"mode": "ro", "uri": "true"},
        )
    return URL.create("sqlite+aiosqlite", database=resolved)


async def create_embedded_engine(config: StoreConfig) -> AsyncEngine:
    path = resolve_sqlite_path(config.sqlite_path)
    engine = create_async_engine(sqlite_url(path), echo=False)
    try:
        await _probe(engine)
    except Exception as exc:
        await engine.dispose()
        raise StoreUnavailableError(f"Could not open embedded store {path}") from exc

    logger.info("SQLite database initialized from %s", path)
    return engine
