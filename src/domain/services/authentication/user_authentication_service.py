"""User Authentication Domain Service.

Verifies credentials and issues the access/refresh token pair for a login.
"""

from dataclasses import dataclass

import structlog

from src.core.exceptions import InvalidCredentialsError
from src.domain.entities.user import User
from src.domain.interfaces.services import (
    IClock,
    IPasswordHasher,
    ITokenService,
    UnitOfWorkFactory,
)
from src.domain.value_objects.email import Email, mask_email
from src.domain.value_objects.jwt_token import AccessTokenClaims

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login.

    Attributes:
        user: The authenticated user.
        access_token: Signed access token, returned in the response body.
        refresh_token: Raw refresh token, set by the HTTP layer as a cookie.
    """

    user: User
    access_token: str
    refresh_token: str


class UserAuthenticationService:
    """Domain service for credential login.

    An unknown email and a wrong password produce the same
    ``InvalidCredentialsError``. When no account matches, a verification is
    still run against a dummy hash so both failures cost about the same.

    Each successful login overwrites the stored refresh token hash, so only
    the most recent session stays valid.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        clock: IClock,
    ):
        self._uow_factory = unit_of_work_factory
        self._password_hasher = password_hasher
        self._token_service = token_service
        self._clock = clock

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate ``email``/``password`` and open a new session.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match.
        """
        user = await self._find_user(email)

        if user is None:
            await self._password_hasher.verify_dummy(password or "")
            logger.warning(
                "Authentication failed",
                email=mask_email(email),
                reason="user_not_found",
            )
            raise InvalidCredentialsError()

        if not password or not await self._password_hasher.verify(password, user.password_hash):
            logger.warning(
                "Authentication failed",
                email=mask_email(email),
                user_id=user.id,
                reason="invalid_password",
            )
            raise InvalidCredentialsError()

        access_token = self._token_service.issue_access_token(
            AccessTokenClaims(user_id=user.id, email=user.email)
        )
        refresh_token = self._token_service.issue_refresh_token()
        refresh_token_hash = self._token_service.hash_opaque_token(refresh_token)
        now = self._clock.now()

        async with self._uow_factory() as uow:
            await uow.users.set_refresh_token_hash(user.id, refresh_token_hash, now)
            await uow.commit()

        user.refresh_token_hash = refresh_token_hash
        user.updated_at = now

        logger.info("User authenticated successfully", user_id=user.id)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)

    async def _find_user(self, email: str):
        try:
            email_vo = Email(email)
        except (TypeError, ValueError):
            return None
        async with self._uow_factory() as uow:
            return await uow.users.get_by_email(email_vo.value)
