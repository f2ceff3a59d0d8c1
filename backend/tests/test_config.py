import pytest

from app.config import Settings, StoreKind, normalize_database_url, resolve_store_config
from app.db import engines
from app.errors import StoreConfigError


def _settings(**values):
    base = {
        "DATABASE_URL": "",
        "SQLITE_DB_PATH": "",
        "STORE_KIND": "",
        "DATA_API_BASE_URL": "",
    }
    base.update(values)
    return Settings(_env_file=None, **base)


def test_embedded_when_no_connection_string():
    config = resolve_store_config(_settings())
    assert config.kind is StoreKind.EMBEDDED
    assert config.database_url is None


def test_remote_when_connection_string_present():
    config = resolve_store_config(_settings(DATABASE_URL="postgres://u:p@db.example.org/compass"))
    assert config.kind is StoreKind.REMOTE
    assert config.database_url == "postgresql+asyncpg://u:p@db.example.org/compass"


def test_explicit_kind_overrides_environment():
    config = resolve_store_config(
        _settings(
            STORE_KIND="HTTP-with-fallback",
            DATABASE_URL="postgres://db/compass",
            DATA_API_BASE_URL="https://compass.example.org/api/v1/",
            SQLITE_DB_PATH="/srv/data.db",
        )
    )
    assert config.kind is StoreKind.HTTP_WITH_FALLBACK
    assert config.api_base_url == "https://compass.example.org/api/v1"
    assert config.sqlite_path == "/srv/data.db"


@pytest.mark.parametrize(
    "values",
    [
        {"STORE_KIND": "mongo"},
        {"STORE_KIND": "remote"},
        {"STORE_KIND": "http-with-fallback"},
    ],
)
def test_invalid_configurations(values):
    with pytest.raises(StoreConfigError):
        resolve_store_config(_settings(**values))


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://h/db", "postgresql+asyncpg://h/db"),
        ("postgresql://h/db", "postgresql+asyncpg://h/db"),
        ("postgresql+asyncpg://h/db", "postgresql+asyncpg://h/db"),
        ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
        # sslmode survives here; remote_engine_args turns it into connect args
        (
            "postgres://u@h/db?sslmode=require",
            "postgresql+asyncpg://u@h/db?sslmode=require",
        ),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_cors_origins_list():
    settings = _settings(CORS_ORIGINS="http://a.test, ,http://b.test")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestSqlitePathDiscovery:
    @pytest.fixture(autouse=True)
    def isolated_roots(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(engines, "PROJECT_ROOT", tmp_path / "project")

    def test_explicit_path_wins(self, tmp_path):
        explicit = tmp_path / "custom.db"
        explicit.write_bytes(b"")
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "data.db").write_bytes(b"")
        assert engines.resolve_sqlite_path(str(explicit)) == explicit

    def test_falls_through_candidates(self, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (public / "data.db").write_bytes(b"")
        found = engines.resolve_sqlite_path(str(tmp_path / "missing.db"))
        assert found.resolve() == (public / "data.db").resolve()

    def test_missing_file_is_a_config_error(self):
        with pytest.raises(StoreConfigError):
            engines.resolve_sqlite_path()


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql+asyncpg://u@localhost/db", {"ssl": False}),
        ("postgresql+asyncpg://u@127.0.0.1:5432/db", {"ssl": False}),
        ("postgresql+asyncpg://u@db.example.org/db", {"ssl": "require"}),
        ("postgresql+asyncpg://u@127.0.0.1/db?sslmode=require", {"ssl": "require"}),
        ("postgresql+asyncpg://u@db.example.org/db?sslmode=disable", {"ssl": False}),
        ("postgresql+asyncpg://u@db.example.org/db?sslmode=verify-full", {"ssl": "verify-full"}),
        ("sqlite+aiosqlite:///x.db", {}),
    ],
)
def test_remote_connect_args(url, expected):
    _, connect_args = engines.remote_engine_args(url)
    assert connect_args == expected


def test_libpq_only_parameters_are_stripped():
    url, connect_args = engines.remote_engine_args(
        normalize_database_url(
            "postgresql://u@ep-1.neon.tech/compass"
            "?sslmode=require&channel_binding=require&application_name=compass"
        )
    )
    assert url.drivername == "postgresql+asyncpg"
    assert dict(url.query) == {"application_name": "compass"}
    assert url.host == "ep-1.neon.tech"
    assert connect_args == {"ssl": "require"}


def test_unknown_sslmode_is_a_config_error():
    with pytest.raises(StoreConfigError):
        engines.remote_engine_args("postgresql+asyncpg://u@db.example.org/db?sslmode=sometimes")


def test_read_only_sqlite_url_quotes_path(tmp_path):
    path = tmp_path / "odd?dir#1%" / "data.db"
    url = engines.sqlite_url(path)
    assert url.database.startswith("file:")
    assert "?" not in url.database
    assert "#" not in url.database
    assert url.database.endswith("odd%3Fdir%231%25/data.db")
    assert dict(url.query) == {"mode": "ro", "uri": "true"}
