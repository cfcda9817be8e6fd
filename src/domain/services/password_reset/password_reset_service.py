"""Password Reset Service.

This domain service handles the execution of password resets using valid tokens,
following single responsibility principle and clean code practices.
"""

import structlog

from src.core.exceptions import ExpiredTokenError, InvalidTokenError
from src.domain.interfaces.services import (
    IClock,
    IPasswordHasher,
    ITokenService,
    UnitOfWorkFactory,
)
from src.domain.services.validation import validated_password

logger = structlog.get_logger(__name__)


class PasswordResetService:
    """Service for executing password resets with valid tokens.

    A token is consumed by a conditional update that only succeeds while
    ``used`` is still false. The new password hash, the cleared refresh token
    hash and the consumed token are written in one transaction, so two
    concurrent confirmations of the same token cannot both succeed and a
    failure leaves nothing half-applied.

    An expired token is marked used on first touch and reported as
    ``ExpiredTokenError``; presenting it again reports ``InvalidTokenError``.
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

    async def confirm_reset(self, raw_token: str, new_password: str) -> None:
        """Replace the password of the token's owner and log them out.

        Args:
            raw_token: The token from the reset link.
            new_password: Must satisfy the strength policy.

        Raises:
            ValidationError: If ``new_password`` is too weak.
            InvalidTokenError: If the token is unknown or already used.
            ExpiredTokenError: If the token expired before this call.
        """
        password = validated_password(new_password, field="newPassword")

        if not raw_token:
            raise InvalidTokenError()

        token_hash = self._token_service.hash_opaque_token(raw_token)

        async with self._uow_factory() as uow:
            token = await uow.reset_tokens.get_unused_by_hash(token_hash)

        if token is None:
            logger.warning("Password reset rejected", reason="unknown_or_used_token")
            raise InvalidTokenError()

        now = self._clock.now()
        if token.is_expired(now):
            async with self._uow_factory() as uow:
                await uow.reset_tokens.mark_used_if_unused(token.id, now)
                await uow.commit()
            logger.warning(
                "Password reset rejected",
                reason="expired_token",
                user_id=token.user_id,
            )
            raise ExpiredTokenError()

        password_hash = await self._password_hasher.hash(password.value)

        async with self._uow_factory() as uow:
            if not await uow.reset_tokens.mark_used_if_unused(token.id, now):
                await uow.rollback()
                logger.warning(
                    "Password reset rejected",
                    reason="token_consumed_concurrently",
                    user_id=token.user_id,
                )
                raise InvalidTokenError()

            if not await uow.users.update_password_and_clear_sessions(
                token.user_id, password_hash, now
            ):
                await uow.rollback()
                logger.warning(
                    "Password reset rejected",
                    reason="user_not_found",
                    user_id=token.user_id,
                )
                raise InvalidTokenError()

            await uow.commit()

        logger.info("Password reset completed", user_id=token.user_id)
