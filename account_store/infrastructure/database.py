"""Database Session Manager — async connection pool with scoped sessions and transactions.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - transaction() commits only on a clean exit; any exception rolls the whole unit back
    - Sessions are closed (connection returned to the pool) on every exit path
    - All SQLAlchemy and socket failures mapped to StoreUnavailableError
    - Domain errors raised inside a session pass through unchanged after rollback

Design Decisions:
    - Manager is created by the FastAPI lifespan and stored on app.state, then
      injected into services; no module-level singleton
    - expire_on_commit=False: prevents lazy-load issues in async context
    - create_schema() uses metadata.create_all (CREATE TABLE IF NOT EXISTS);
      the single users table needs no migration history
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from account_store.core.errors import AccountStoreError, StoreUnavailableError
from account_store.db.base import Base
import account_store.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine/pool and hands out scoped sessions and transactions."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        connect_args: dict[str, Any] | None = None,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args=connect_args or {},
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an already-configured engine (scripts and test fixtures)."""
        manager = cls.__new__(cls)
        manager.engine = engine
        manager._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )
        return manager

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except AccountStoreError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra={"operation": "commit"})
            raise StoreUnavailableError("commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra={"operation": "execute"})
            raise StoreUnavailableError("execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", extra={"operation": "query"})
            raise StoreUnavailableError("query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": "unknown"})
            raise StoreUnavailableError("unknown")
        except OSError as e:
            logger.error(f"DB connection error: {e}", extra={"operation": "connect"})
            raise StoreUnavailableError("connect")
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session inside BEGIN: COMMIT on clean exit, ROLLBACK on any exception."""
        async with self.session() as session:
            async with session.begin():
                yield session

    async def create_schema(self) -> None:
        """Create missing tables. Safe to call on every start."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Schema initialization failed: {e}", extra={"operation": "create_schema"})
            raise StoreUnavailableError("create_schema")
        logger.info("User table initialized")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        """Close pooled connections. Called once on shutdown."""
        await self.engine.dispose()
        logger.info("Database pool disposed")
