"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions never escape unclassified: StaleDataError becomes
      ConflictError, everything else becomes DataAccessError (core/errors.py)
    - Cancellation rolls back and propagates unchanged

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - translate_db_errors() is shared by the session manager and the Store, so a
      fault is classified where it happens, not where it is finally caught
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy import text

from registry.core.errors import ConflictError, DataAccessError, RegistryError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_db_errors(
    db: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Roll back and classify any failure raised inside the block."""
    try:
        yield
    except RegistryError:
        await db.rollback()
        raise
    except StaleDataError as e:
        await db.rollback()
        logger.warning(
            f"Concurrent modification during {operation}: {e}",
            extra={"operation": operation},
        )
        raise ConflictError(
            "Company was updated by another user. Please reload and try again.",
            cause=e,
        ) from e
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"DB integrity error: {e}", extra={"operation": operation})
        raise DataAccessError(
            "Integrity constraint violated", operation, cause=e,
        ) from e
    except OperationalError as e:
        await db.rollback()
        logger.error(f"DB operational error: {e}", extra={"operation": operation})
        raise DataAccessError(
            "Connection or operational error", operation, cause=e,
        ) from e
    except DBAPIError as e:
        await db.rollback()
        logger.error(f"DB driver error: {e}", extra={"operation": operation})
        raise DataAccessError("Database driver error", operation, cause=e) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
        raise DataAccessError(
            "Database operation failed", operation, cause=e,
        ) from e
    except asyncio.CancelledError:
        await db.rollback()
        raise


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and fault classification."""
        session = self._session_factory()
        try:
            async with translate_db_errors(session, "session"):
                yield session
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


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
