"""Shared test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all tables
    - get_db overridden to use the test database
    - get_authenticator overridden with a known admin token
    - Login rate limiting disabled unless a test turns it on
"""

import os

os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import nallore_api.models  # noqa: F401  (registers tables on Base.metadata)
from nallore_api.database import Base, get_db
from nallore_api.main import app
from nallore_api.utils.auth import SharedSecretAuthenticator, get_authenticator

ADMIN_TOKEN = "test-admin-token"
ADMIN_HEADERS = {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def authenticator():
    return SharedSecretAuthenticator(ADMIN_TOKEN)


@pytest.fixture
async def client(test_session_factory, authenticator):
    """FastAPI test client with DB and authenticator dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_authenticator] = lambda: authenticator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)
