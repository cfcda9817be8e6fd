"""Email delivery and password reset message rendering.

Two transports implement ``IEmailSender``:

- ``ConsoleEmailSender`` writes the message to the structured log. It is the
  default and what the test suite uses.
- ``SmtpEmailSender`` delivers through fastapi-mail.

Neither raises. A failed delivery is returned as ``EmailResult(success=False)``
and logged, so the password reset request flow answers the same way whether
the mail server is up or not.

Messages are rendered with Jinja2 from the ``templates`` directory next to
this module; HTML templates are auto-escaped.
"""

import asyncio
import uuid
from pathlib import Path
from typing import Optional

import structlog
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
from fastapi_mail.schemas import MessageType, MultipartSubtypeEnum
from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.core.config.email import EmailSettings
from src.domain.interfaces.email import (
    EmailResult,
    IEmailSender,
    IPasswordResetEmailRenderer,
    RenderedEmail,
)
from src.domain.value_objects.email import mask_email

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

PASSWORD_RESET_SUBJECT = "Reset your password"


class PasswordResetEmailRenderer(IPasswordResetEmailRenderer):
    """Renders the password reset message from the bundled templates.

    Attributes:
        frontend_url: Base URL of the web client, without trailing slash.
        ttl_minutes: Reset token lifetime, stated in the message.
        app_name: Product name shown in the message.
    """

    def __init__(self, frontend_url: str, ttl_minutes: int, app_name: str = "Authgate"):
        self.frontend_url = frontend_url.rstrip("/")
        self.ttl_minutes = ttl_minutes
        self.app_name = app_name
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def reset_url(self, raw_token: str) -> str:
        return f"{self.frontend_url}/reset-password?token={raw_token}"

    def render(self, raw_token: str) -> RenderedEmail:
        context = {
            "app_name": self.app_name,
            "reset_url": self.reset_url(raw_token),
            "ttl_minutes": self.ttl_minutes,
        }
        html_body = self.jinja_env.get_template("password_reset.html").render(**context)
        text_body = self.jinja_env.get_template("password_reset.txt").render(**context)
        return RenderedEmail(
            subject=PASSWORD_RESET_SUBJECT, html_body=html_body, text_body=text_body
        )


class ConsoleEmailSender(IEmailSender):
    """Logs outgoing messages instead of delivering them."""

    async def send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        message_id = str(uuid.uuid4())
        logger.info(
            "Email sent to console",
            to_email=mask_email(to_address),
            subject=subject,
            message_id=message_id,
            html_length=len(html_body),
            text_length=len(text_body),
        )
        return EmailResult(success=True, message_id=message_id)


class SmtpEmailSender(IEmailSender):
    """Delivers messages over SMTP using fastapi-mail."""

    def __init__(self, settings: EmailSettings, fastmail: Optional[FastMail] = None):
        self.timeout_seconds = settings.SMTP_TIMEOUT_SECONDS
        self.fastmail = fastmail or FastMail(self._connection_config(settings))
        logger.info(
            "SmtpEmailSender configured",
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            starttls=settings.SMTP_USE_TLS,
            ssl=settings.SMTP_USE_SSL,
        )

    @staticmethod
    def _connection_config(settings: EmailSettings) -> ConnectionConfig:
        password = settings.SMTP_PASSWORD.get_secret_value() if settings.SMTP_PASSWORD else ""
        return ConnectionConfig(
            MAIL_USERNAME=settings.SMTP_USERNAME or "",
            MAIL_PASSWORD=password,
            MAIL_FROM=settings.EMAIL_FROM,
            MAIL_FROM_NAME=settings.EMAIL_FROM_NAME,
            MAIL_SERVER=settings.SMTP_HOST,
            MAIL_PORT=settings.SMTP_PORT,
            MAIL_STARTTLS=settings.SMTP_USE_TLS,
            MAIL_SSL_TLS=settings.SMTP_USE_SSL,
            USE_CREDENTIALS=bool(settings.SMTP_USERNAME and settings.SMTP_PASSWORD),
            VALIDATE_CERTS=True,
            TIMEOUT=settings.SMTP_TIMEOUT_SECONDS,
        )

    async def send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        message = MessageSchema(
            subject=subject,
            recipients=[to_address],
            body=html_body,
            alternative_body=text_body,
            subtype=MessageType.html,
            multipart_subtype=MultipartSubtypeEnum.alternative,
        )
        try:
            await asyncio.wait_for(
                self.fastmail.send_message(message), timeout=self.timeout_seconds
            )
        except Exception as e:
            logger.error(
                "Email delivery failed",
                to_email=mask_email(to_address),
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return EmailResult(success=False, error=type(e).__name__)

        logger.info("Email delivered", to_email=mask_email(to_address), subject=subject)
        return EmailResult(success=True)


def create_email_sender(settings: EmailSettings) -> IEmailSender:
    """Build the transport named by ``EMAIL_PROVIDER``.

    Unknown providers fall back to the console transport with a warning.
    """
    provider = settings.EMAIL_PROVIDER.strip().lower()
    if provider == "smtp":
        return SmtpEmailSender(settings)
    if provider != "console":
        logger.warning("Unknown email provider, using console", provider=provider)
    return ConsoleEmailSender()
