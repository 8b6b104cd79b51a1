"""
Pytest configuration and fixtures.

Tests run against a SQLite file database; every test starts from freshly
created tables.
"""
import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from ecotrack.core.config import ConfigFile, get_config
from ecotrack.create_app import get_app
from ecotrack.database import Base
from ecotrack.database import schemas  # noqa: F401  registers the models on Base.metadata
from ecotrack.database.base import get_db_url
from ecotrack.database.session_manager.db_session import Database
from ecotrack.test.factory.create_async_session import async_session
from ecotrack.test.factory.user import UserFactory

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@pytest.fixture(scope="session")
def test_config():
    """
    Get test configuration.

    Returns configuration with test database settings.
    """
    return get_config(ConfigFile.TEST)


@pytest_asyncio.fixture(scope="function")
async def test_async_engine(test_config):
    """Engine used only to create and drop the schema."""
    test_engine = create_async_engine(get_db_url(test_config))

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def db_cleanup(test_async_engine):
    """
    Drop and recreate all tables before each test, and drop them after.
    """
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def test_database(test_config, db_cleanup):
    """
    Database handle shared by the test app, the factories and test_db_session.
    """
    database = Database(get_db_url(test_config))
    async_session.bind(database)

    yield database

    async_session.unbind()
    await database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_database):
    """
    Create FastAPI application with test configuration.

    ASGITransport does not run the lifespan handler, so the database is attached here.
    """
    app = get_app(ConfigFile.TEST)
    app.state.database = test_database

    yield app


@pytest_asyncio.fixture(scope="function")
async def test_async_client(test_app):
    """
    Create async HTTP client for API testing.

    Uses httpx AsyncClient with ASGITransport for testing FastAPI endpoints.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://localhost:8000", follow_redirects=True
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def test_db_session(test_database):
    """
    Provide database session for service tests.
    """
    async with test_database.session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_user():
    """A registered user whose password is ``DEFAULT_PASSWORD``."""
    return await UserFactory()


@pytest.fixture(scope="function")
def auth_headers(test_app, test_user):
    """Bearer token header for ``test_user``, signed by the test app."""
    token = test_app.state.token_manager.create_access_token(test_user.id, test_user.email)
    return {"Authorization": f"Bearer {token}"}
