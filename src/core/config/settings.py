"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, auth, email) into a single ``Settings`` class.

It loads settings from environment variables and ``.env`` files and validates
them. Callers obtain the process-wide instance through ``get_settings()``;
tests build their own ``Settings`` and hand it to ``create_application``.
"""

from functools import lru_cache

import structlog
from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings, CookieSettings
from .database import DatabaseSettings
from .email import EmailSettings

logger = structlog.get_logger(__name__)


class Settings(AppSettings, DatabaseSettings, AuthSettings, CookieSettings, EmailSettings):
    """The main settings class that aggregates all application configurations.

    Security Note:
        - JWT_SECRET, DATABASE_URL and SMTP_PASSWORD are never logged.
        - ``validate_for_environment`` refuses the shipped JWT secret in
          production.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    def validate_for_environment(self) -> None:
        """Validates settings that depend on the deployment environment.

        Raises:
            ValueError: If the default JWT secret is used in production, or
                the SMTP configuration is inconsistent.
        """
        if self.uses_default_jwt_secret:
            if self.is_production:
                logger.error("default_jwt_secret_in_production")
                raise ValueError("JWT_SECRET must be set in production")
            logger.warning(
                "default_jwt_secret_in_use",
                app_env=self.APP_ENV,
                hint="Set JWT_SECRET before deploying",
            )

        self.validate_smtp_config()
        logger.info(
            "settings_validated",
            app_env=self.APP_ENV,
            email_provider=self.EMAIL_PROVIDER,
            debug=self.DEBUG,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
