"""Test fixtures: a fresh in-memory database per test.

Each test gets its own SQLite database (aiosqlite, StaticPool so every
session sees the same connection), created from Base.metadata and
thrown away afterwards. No Postgres or Redis needed; the rate limiter
skips itself when Redis was never initialised.
"""

import os

os.environ.setdefault("MUZER_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from muzer.auth.dependencies import Identity, get_identity_resolver  # noqa: E402
from muzer.db.engine import get_db  # noqa: E402
from muzer.db.models import Base  # noqa: E402
from muzer.main import app  # noqa: E402

TEST_USER_ID = "user-00000001"


class StaticIdentityResolver:
    """Resolver that always returns the same identity (or None)."""

    def __init__(self, identity):
        self.identity = identity

    async def resolve_identity(self, request):
        return self.identity


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a throwaway in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with get_db overridden and a fixed signed-in user.

    The identity resolver is swapped for one that always returns
    TEST_USER_ID, so tests don't need to mint session tokens.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_resolver] = lambda: StaticIdentityResolver(
        Identity(user_id=TEST_USER_ID)
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauthenticated_client(db_session):
    """HTTP client WITHOUT the identity override: the real session guard runs.

    Requests carry no session unless the test sends a cookie or a
    Bearer token made with create_session_token().
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
