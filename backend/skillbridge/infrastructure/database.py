"""Database Session Manager — async engine, bounded connect retry, auto-rollback sessions.

Invariants:
    - connect() returns immediately once `connected` is set (cached handshake)
    - connect() makes at most max_attempts handshakes, fixed delay between them,
      then raises DatabaseConnectionError
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Connection state lives on the manager instance, handed to routes through
      get_db_manager: tests swap the whole manager via dependency_overrides
    - No lock around the first handshake: concurrent cold requests may each
      handshake; the engine pool absorbs the duplicates
    - Fixed delay, no backoff growth, no circuit breaker
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from skillbridge.core.errors import DatabaseError, DatabaseConnectionError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and a retried handshake."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        max_attempts: int = 3,
        retry_delay_ms: int = 1000,
    ):
        engine_kwargs = {"pool_pre_ping": True, "pool_recycle": 3600}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.max_attempts = max_attempts
        self.retry_delay_ms = retry_delay_ms
        self.connected = False

    async def connect(self) -> None:
        """Ensure a live connection exists, retrying the handshake a bounded number of times."""
        if self.connected:
            return
        for attempt in range(1, self.max_attempts + 1):
            try:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                self.connected = True
                logger.info("Database connected", extra={"attempt": attempt})
                return
            except Exception as e:
                logger.warning(
                    f"Database connection attempt {attempt} failed: {e}",
                    extra={"attempt": attempt},
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay_ms / 1000)
        logger.error("Maximum database connection attempts reached")
        raise DatabaseConnectionError(self.max_attempts)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            self.connected = False
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

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
        await self.engine.dispose()
        self.connected = False


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def find_db_manager() -> DatabaseSessionManager | None:
    """FastAPI dependency for probes: the manager, or None before startup."""
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the connection manager (read paths with fallback)."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions (connects first, no fallback)."""
    await manager.connect()
    async with manager.session() as session:
        yield session
