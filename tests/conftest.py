"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the users table
    - Route tests inject the test manager and hasher via dependency_overrides
    - The hasher runs at the lowest bcrypt cost to keep the suite fast

Design Decisions:
    - SQLite in-memory: fast, no external dependency; UPDATE/INSERT ... RETURNING
      and the unique constraint behave as on PostgreSQL for this table
    - StaticPool: one shared connection so the in-memory database survives
      across sessions
"""

import os

# Never point the suite at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from account_store.db.base import Base  # noqa: E402
from account_store.infrastructure.database import DatabaseSessionManager  # noqa: E402
from account_store.infrastructure.password_hasher import BcryptPasswordHasher  # noqa: E402
from account_store.services.account_service import AccountService  # noqa: E402


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
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def service(db_manager, hasher):
    return AccountService(db_manager, hasher)


@pytest.fixture
async def client(db_manager, hasher):
    """FastAPI test client with manager and hasher overridden."""
    from account_store.api.dependencies import get_db_manager, get_password_hasher
    from account_store.main import app

    app.dependency_overrides[get_db_manager] = lambda: db_manager
    app.dependency_overrides[get_password_hasher] = lambda: hasher

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def ann(service):
    """Register the reference account used across tests."""
    return await service.register("ann", "a@x.com", "secret1", "hi", "img.png")
