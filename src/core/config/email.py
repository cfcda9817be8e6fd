"""Email configuration settings.

This module defines the parameters used to deliver password reset emails.
The ``console`` provider writes messages to the structured log and is the
default outside production; ``smtp`` delivers through fastapi-mail.
"""

from typing import Optional

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Email configuration settings with secure defaults.

    Attributes:
        EMAIL_PROVIDER: Delivery backend, ``console`` or ``smtp``. Unknown
            names fall back to ``console`` with a warning.
        EMAIL_FROM: Sender address.
        EMAIL_FROM_NAME: Sender display name.
        SMTP_HOST: SMTP server hostname
        SMTP_PORT: SMTP server port (587 for STARTTLS, 465 for SSL)
        SMTP_USERNAME: SMTP authentication username
        SMTP_PASSWORD: SMTP authentication password (SecretStr)
        SMTP_USE_TLS: Enable STARTTLS
        SMTP_USE_SSL: Enable implicit SSL
        SMTP_TIMEOUT_SECONDS: Upper bound on a single delivery attempt
    """

    EMAIL_PROVIDER: str = Field(
        default="console",
        description="Email delivery backend",
    )
    EMAIL_FROM: EmailStr = Field(
        default="noreply@example.com",
        description="Default sender email address",
    )
    EMAIL_FROM_NAME: str = Field(
        default="Authgate",
        description="Default sender name",
    )

    SMTP_HOST: str = Field(default="localhost")
    SMTP_PORT: int = Field(default=587, ge=1, le=65535)
    SMTP_USERNAME: Optional[str] = Field(default=None)
    SMTP_PASSWORD: Optional[SecretStr] = Field(default=None)
    SMTP_USE_TLS: bool = Field(default=True)
    SMTP_USE_SSL: bool = Field(default=False)
    SMTP_TIMEOUT_SECONDS: int = Field(default=10, ge=1, le=120)

    def validate_smtp_config(self) -> None:
        """Validate SMTP configuration when the SMTP provider is selected.

        Raises:
            ValueError: If SMTP configuration is inconsistent
        """
        if self.EMAIL_PROVIDER != "smtp":
            return

        if self.SMTP_USE_TLS and self.SMTP_USE_SSL:
            raise ValueError(
                "Cannot enable both SMTP_USE_TLS and SMTP_USE_SSL simultaneously"
            )

        if bool(self.SMTP_USERNAME) != bool(self.SMTP_PASSWORD):
            raise ValueError(
                "SMTP_USERNAME and SMTP_PASSWORD must be provided together"
            )
