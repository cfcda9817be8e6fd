"""
Asynchronous Database Module

This module owns the async SQLAlchemy engine and the session factory built on
top of it. A ``Database`` instance is created explicitly by the application
lifespan (or by a test fixture) and disposed when it ends; nothing here is
created at import time.

**Security Note**: DATABASE_URL embeds credentials. Only the driver name is
ever logged.

Key Components:
    - Database: engine + ``async_sessionmaker`` holder.
    - Database.session: context manager yielding an ``AsyncSession`` that is
      rolled back on error and always closed.
    - Database.create_all: creates the tables (SQLite deployments and tests).
    - Database.check_health: ``SELECT 1`` with retry, used at startup and by
      the health endpoint.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from structlog import get_logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.core.config.database import DatabaseSettings

# Registers both tables on SQLModel.metadata.
import src.domain.entities  # noqa: F401

logger = get_logger(__name__)


class Database:
    """Holds the async engine and session factory for one application."""

    def __init__(self, settings: DatabaseSettings, engine: Optional[AsyncEngine] = None):
        self._settings = settings
        self.engine: AsyncEngine = engine or self._build_engine(settings)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info(
            "database_engine_created",
            driver=make_url(settings.DATABASE_URL).drivername,
        )

    @staticmethod
    def _build_engine(settings: DatabaseSettings) -> AsyncEngine:
        if settings.is_sqlite:
            # SQLite uses its own pool classes; pool sizing does not apply.
            # Concurrent writers queue on the file lock for up to the timeout.
            return create_async_engine(
                settings.DATABASE_URL,
                echo=settings.DATABASE_ECHO,
                future=True,
                connect_args={"timeout": settings.SQLITE_BUSY_TIMEOUT},
            )
        return create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            future=True,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
            pool_pre_ping=True,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield an ``AsyncSession``, rolling back if the block raises."""
        async with self.session_factory() as session:
            logger.debug("async_session_created")
            try:
                yield session
            except Exception:
                await session.rollback()
                logger.debug("async_session_rolled_back")
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create all tables registered on ``SQLModel.metadata``."""
        logger.info("database_tables_creating")
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("database_tables_created")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def check_health(self, attempts: int = 1) -> bool:
        """Run ``SELECT 1``, retrying operational errors with backoff.

        Returns:
            bool: True if the database answered, False otherwise.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
                retry=retry_if_exception_type(OperationalError),
                reraise=True,
            ):
                with attempt:
                    async with self.engine.connect() as conn:
                        await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("database_engine_disposed")
