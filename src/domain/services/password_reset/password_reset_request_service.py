"""Password Reset Request Service.

This domain service handles the initiation of password resets: it creates a
single-use token for an existing account and emails a link carrying the raw
token. Callers always get the same outcome, whether or not the account
exists and whether or not the email could be delivered.
"""

import secrets
from datetime import timedelta
from typing import Any, Callable, Optional

import structlog

from src.domain.entities.password_reset_token import PasswordResetToken
from src.domain.interfaces.email import IEmailSender, IPasswordResetEmailRenderer
from src.domain.interfaces.services import IClock, ITokenService, UnitOfWorkFactory
from src.domain.value_objects.email import Email, mask_email
from src.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class PasswordResetRequestService:
    """Service for handling password reset requests.

    This service is responsible for:
    - Looking up the account behind an email
    - Generating and storing a hashed reset token
    - Sending the reset email

    Unknown emails return silently with no token row and no email.
    Delivery failures are logged and absorbed.

    When ``schedule_delivery`` is given (the HTTP layer passes
    ``BackgroundTasks.add_task``), the email is handed to it instead of being
    sent inline, and ``request_reset`` returns without waiting on the mail
    transport.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        token_service: ITokenService,
        email_sender: IEmailSender,
        email_renderer: IPasswordResetEmailRenderer,
        clock: IClock,
        token_ttl_minutes: int = 60,
        schedule_delivery: Optional[Callable[..., Any]] = None,
    ):
        self._uow_factory = unit_of_work_factory
        self._token_service = token_service
        self._email_sender = email_sender
        self._email_renderer = email_renderer
        self._clock = clock
        self._token_ttl = timedelta(minutes=token_ttl_minutes)
        self._schedule_delivery = schedule_delivery

    def generate_reset_token(self) -> ResetToken:
        """Create a high-entropy raw token and the hash it is stored under."""
        raw = secrets.token_hex(ResetToken.ENTROPY_BYTES)
        return ResetToken(raw=raw, token_hash=self._token_service.hash_opaque_token(raw))

    async def request_reset(self, email: str) -> None:
        """Start a password reset for ``email`` if it belongs to an account.

        Never raises for an unknown email or a failed delivery.
        """
        try:
            email_vo = Email(email)
        except (TypeError, ValueError):
            logger.info("Password reset requested for malformed email", email=mask_email(email))
            return

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email_vo.value)
            if user is None:
                logger.info(
                    "Password reset requested for unknown email",
                    email=email_vo.mask_for_logging(),
                )
                return

            token = self.generate_reset_token()
            now = self._clock.now()
            await uow.reset_tokens.add(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=token.token_hash,
                    expires_at=now + self._token_ttl,
                    used=False,
                    created_at=now,
                    updated_at=now,
                )
            )
            await uow.commit()

        logger.info("Password reset token created", user_id=user.id)
        if self._schedule_delivery is not None:
            self._schedule_delivery(self._send_reset_email, user.email, user.id, token)
            return
        await self._send_reset_email(user.email, user.id, token)

    async def _send_reset_email(self, to_address: str, user_id: str, token: ResetToken) -> None:
        try:
            message = self._email_renderer.render(token.raw)
            result = await self._email_sender.send(
                to_address=to_address,
                subject=message.subject,
                html_body=message.html_body,
                text_body=message.text_body,
            )
        except Exception as e:
            logger.error(
                "Password reset email failed",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        if not result.success:
            logger.error("Password reset email failed", user_id=user_id, error=result.error)
            return

        logger.info("Password reset email sent", user_id=user_id, message_id=result.message_id)
