"""Shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` and its own
application instance, so nothing leaks between tests. Time is controlled
through ``FrozenClock``; bcrypt runs at its minimum cost.
"""

from datetime import datetime, timedelta, timezone
from functools import partial
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.application import create_application
from src.core.config.settings import Settings
from src.domain.interfaces.email import EmailResult, IEmailSender
from src.domain.interfaces.services import IClock
from src.infrastructure.database.async_db import Database
from src.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from src.infrastructure.services.authentication.password_hasher import PasswordHasher
from src.infrastructure.services.authentication.token_service import TokenService

TEST_JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


class FrozenClock(IClock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        DATABASE_STARTUP_ATTEMPTS=1,
        JWT_SECRET=TEST_JWT_SECRET,
        BCRYPT_ROUNDS=4,
        EMAIL_PROVIDER="console",
        FRONTEND_URL="http://localhost:5173",
        COOKIE_DOMAIN="",
    )


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture(scope="session")
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service(clock) -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET, clock=clock)


@pytest.fixture
def email_sender() -> AsyncMock:
    sender = AsyncMock(spec=IEmailSender)
    sender.send.return_value = EmailResult(success=True, message_id="test-message-id")
    return sender


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database):
    return partial(SqlAlchemyUnitOfWork, database.session_factory)


@pytest_asyncio.fixture
async def app(settings, clock, password_hasher, email_sender):
    application = create_application(settings)
    application.state.clock = clock
    application.state.password_hasher = password_hasher
    application.state.email_sender = email_sender
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
