"""Authentication settings: token signing, hashing cost and reset-token lifetime.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-super-secret-jwt-key-change-in-production"


class AuthSettings(BaseSettings):
    """Defines settings for credential hashing and token issuance.

    Security Note:
        - JWT_SECRET signs every access token. The shipped default is only
          tolerated outside production (see ``Settings.validate_for_environment``).
        - BCRYPT_ROUNDS below 12 should only be used by the test suite.
    """

    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(ge=1, default=60)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(ge=1, default=30)

    BCRYPT_ROUNDS: int = Field(ge=4, le=31, default=12)

    PASSWORD_RESET_TOKEN_TTL_MINUTES: int = Field(ge=1, le=1440, default=60)

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET


class CookieSettings(BaseSettings):
    """Attributes of the HttpOnly refresh-token cookie set on login."""

    COOKIE_DOMAIN: str = "localhost"
    COOKIE_PATH: str = "/"
    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = Field(default="lax", pattern="^(strict|lax|none)$")
