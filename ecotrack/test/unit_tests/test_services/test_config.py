"""
Tests for configuration loading and database URL construction.
"""

from ecotrack.core import config as config_module
from ecotrack.core.config import Config, ConfigFile, get_config
from ecotrack.database.base import get_db_url, get_engine_kw, get_sync_url


def test_test_config_uses_sqlite(test_config):
    url = get_db_url(test_config)

    assert url.drivername == "sqlite+aiosqlite"
    assert url.database == "ecotrack_test.db"
    assert get_engine_kw(url) == {}
    assert get_sync_url(test_config) == "sqlite:///ecotrack_test.db"


def test_test_config_ignores_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    get_config.cache_clear()
    try:
        config = get_config(ConfigFile.TEST)
    finally:
        get_config.cache_clear()

    assert config.section("auth")["jwt_secret"] == "test-secret"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://eco:pw@db:5432/ecotrack")

    data = config_module._apply_env_overrides({"auth": {"jwt_secret": ""}})

    assert data["auth"]["jwt_secret"] == "from-env"
    assert data["db"]["url"] == "postgresql+asyncpg://eco:pw@db:5432/ecotrack"


def test_db_url_from_fields_and_from_url():
    from_fields = get_db_url(
        Config(
            {
                "db": {
                    "drivername": "postgresql+asyncpg",
                    "username": "eco",
                    "password": "pw",
                    "host": "localhost",
                    "port": 5432,
                    "database": "ecotrack",
                }
            }
        )
    )
    from_url = get_db_url(Config({"db": {"url": "postgresql+asyncpg://eco:pw@db:5432/other"}}))

    assert from_fields.render_as_string(hide_password=False) == (
        "postgresql+asyncpg://eco:pw@localhost:5432/ecotrack"
    )
    assert from_url.host == "db"
    assert from_url.database == "other"
    assert get_engine_kw(from_url)["pool_size"] == 2


def test_missing_section_is_empty():
    assert Config({}).section("insights") == {}
