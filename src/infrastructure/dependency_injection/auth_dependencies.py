"""Dependencies for the authentication endpoints.

Long-lived collaborators (settings, database, clock, password hasher, email
sender) are created once by the application lifespan and kept on
``app.state``. The factories below read them from there and assemble the
request-scoped domain services, so tests can swap any piece through
``app.dependency_overrides`` or by replacing the ``app.state`` entry.
"""

from functools import partial
from typing import Annotated

from fastapi import BackgroundTasks, Depends, Request

from src.core.config.settings import Settings
from src.domain.interfaces.email import IEmailSender, IPasswordResetEmailRenderer
from src.domain.interfaces.services import (
    IClock,
    IPasswordHasher,
    ITokenService,
    UnitOfWorkFactory,
)
from src.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from src.domain.services.authentication.user_registration_service import (
    UserRegistrationService,
)
from src.domain.services.password_reset.password_reset_request_service import (
    PasswordResetRequestService,
)
from src.domain.services.password_reset.password_reset_service import (
    PasswordResetService,
)
from src.infrastructure.database.async_db import Database
from src.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from src.infrastructure.services.authentication.token_service import TokenService
from src.infrastructure.services.email.email_service import PasswordResetEmailRenderer

# ---------------------------------------------------------------------------
# Application-scoped components
# ---------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_clock(request: Request) -> IClock:
    return request.app.state.clock


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


AppSettings = Annotated[Settings, Depends(get_app_settings)]
AppDatabase = Annotated[Database, Depends(get_database)]
Clock = Annotated[IClock, Depends(get_clock)]
PasswordHasher = Annotated[IPasswordHasher, Depends(get_password_hasher)]
EmailSender = Annotated[IEmailSender, Depends(get_email_sender)]

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_unit_of_work_factory(database: AppDatabase) -> UnitOfWorkFactory:
    """Factory that returns a callable producing fresh units of work."""
    return partial(SqlAlchemyUnitOfWork, database.session_factory)


def get_token_service(settings: AppSettings, clock: Clock) -> ITokenService:
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        clock=clock,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def get_password_reset_email_renderer(settings: AppSettings) -> IPasswordResetEmailRenderer:
    return PasswordResetEmailRenderer(
        frontend_url=settings.FRONTEND_URL,
        ttl_minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES,
        app_name=settings.EMAIL_FROM_NAME,
    )


UnitOfWork = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
Tokens = Annotated[ITokenService, Depends(get_token_service)]
ResetEmailRenderer = Annotated[
    IPasswordResetEmailRenderer, Depends(get_password_reset_email_renderer)
]

# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


def get_user_registration_service(
    uow_factory: UnitOfWork,
    password_hasher: PasswordHasher,
    clock: Clock,
) -> UserRegistrationService:
    return UserRegistrationService(uow_factory, password_hasher, clock)


def get_user_authentication_service(
    uow_factory: UnitOfWork,
    password_hasher: PasswordHasher,
    token_service: Tokens,
    clock: Clock,
) -> UserAuthenticationService:
    return UserAuthenticationService(uow_factory, password_hasher, token_service, clock)


def get_password_reset_request_service(
    uow_factory: UnitOfWork,
    token_service: Tokens,
    email_sender: EmailSender,
    email_renderer: ResetEmailRenderer,
    clock: Clock,
    settings: AppSettings,
    background_tasks: BackgroundTasks,
) -> PasswordResetRequestService:
    # Delivery runs after the response is sent.
    return PasswordResetRequestService(
        uow_factory,
        token_service,
        email_sender,
        email_renderer,
        clock,
        token_ttl_minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES,
        schedule_delivery=background_tasks.add_task,
    )


def get_password_reset_service(
    uow_factory: UnitOfWork,
    password_hasher: PasswordHasher,
    token_service: Tokens,
    clock: Clock,
) -> PasswordResetService:
    return PasswordResetService(uow_factory, password_hasher, token_service, clock)


RegistrationService = Annotated[UserRegistrationService, Depends(get_user_registration_service)]
AuthenticationService = Annotated[
    UserAuthenticationService, Depends(get_user_authentication_service)
]
ResetRequestService = Annotated[
    PasswordResetRequestService, Depends(get_password_reset_request_service)
]
ResetConfirmService = Annotated[PasswordResetService, Depends(get_password_reset_service)]
