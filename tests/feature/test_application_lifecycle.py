import pytest
from pydantic import SecretStr

from src.core.application import create_application
from src.core.config.auth import DEFAULT_JWT_SECRET
from src.infrastructure.services.authentication.password_hasher import PasswordHasher
from src.infrastructure.services.clock import SystemClock
from src.infrastructure.services.email.email_service import ConsoleEmailSender


async def test_startup_wires_default_components(settings):
    app = create_application(settings)

    async with app.router.lifespan_context(app):
        assert isinstance(app.state.clock, SystemClock)
        assert isinstance(app.state.password_hasher, PasswordHasher)
        assert isinstance(app.state.email_sender, ConsoleEmailSender)
        assert await app.state.database.check_health()

    assert app.state.database is None


async def test_startup_fails_when_database_is_unreachable(settings, tmp_path):
    unreachable = settings.model_copy(
        update={"DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}"}
    )
    app = create_application(unreachable)

    with pytest.raises(RuntimeError, match="Database unavailable"):
        async with app.router.lifespan_context(app):
            pass


async def test_startup_refuses_default_secret_in_production(settings):
    production = settings.model_copy(
        update={"APP_ENV": "production", "JWT_SECRET": SecretStr(DEFAULT_JWT_SECRET)}
    )
    app = create_application(production)

    with pytest.raises(ValueError, match="JWT_SECRET"):
        async with app.router.lifespan_context(app):
            pass


def test_docs_are_hidden_unless_debug(settings):
    assert create_application(settings).docs_url is None
    assert create_application(settings.model_copy(update={"DEBUG": True})).docs_url == "/docs"
