"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources. Every long-lived
collaborator is created here and kept on ``app.state``; nothing is created
at import time.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config.settings import Settings
from src.core.logging import logger
from src.infrastructure.database.async_db import Database
from src.infrastructure.services.authentication.password_hasher import PasswordHasher
from src.infrastructure.services.clock import SystemClock
from src.infrastructure.services.email.email_service import create_email_sender


def create_lifespan_manager(settings: Settings):
    """Create the application lifespan manager.

    Args:
        settings: The settings the application was created with.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager that handles startup and shutdown events.

        Startup validates settings, opens the database engine, checks it
        answers and creates missing tables. Components already placed on
        ``app.state`` (by tests) are left alone.

        Raises:
            RuntimeError: If database is unavailable during startup
        """
        # Startup
        settings.validate_for_environment()

        database = getattr(app.state, "database", None) or Database(settings)
        if not await database.check_health(attempts=settings.DATABASE_STARTUP_ATTEMPTS):
            logger.error("database_unavailable_on_startup")
            await database.dispose()
            raise RuntimeError("Database unavailable")
        if settings.DATABASE_AUTO_CREATE:
            await database.create_all()

        app.state.settings = settings
        app.state.database = database
        if getattr(app.state, "clock", None) is None:
            app.state.clock = SystemClock()
        if getattr(app.state, "password_hasher", None) is None:
            app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        if getattr(app.state, "email_sender", None) is None:
            app.state.email_sender = create_email_sender(settings)

        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        # Shutdown
        await database.dispose()
        app.state.database = None
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
