import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from jwt import decode as jwt_decode, encode as jwt_encode, PyJWTError
from structlog import get_logger

from src.core.exceptions import InvalidTokenError
from src.domain.interfaces.services import IClock, ITokenService
from src.domain.value_objects.jwt_token import AccessTokenClaims

logger = get_logger(__name__)

REFRESH_TOKEN_BYTES = 32


def hash_opaque_token(raw: str) -> str:
    """SHA-256 hex digest under which refresh and reset tokens are stored."""
    return hashlib.sha256(raw.encode()).hexdigest()


class TokenService(ITokenService):
    """Service for issuing access and refresh tokens.

    Access tokens are compact JWTs signed with a shared secret and carry the
    user id, the email and the issue/expiry times. Refresh tokens are opaque
    random strings; only their SHA-256 is persisted on the user row, which
    makes each login replace the previous session.

    Expiry is evaluated against the injected clock rather than the wall
    clock, so ``iat``, ``exp`` and verification always agree.

    Attributes:
        secret (str): Signing secret.
        algorithm (str): JWS algorithm, HS256 by default.
        access_token_ttl (timedelta): Lifetime of an access token.
        clock (IClock): Source of ``iat`` and of "now" during verification.
    """

    def __init__(
        self,
        secret: str,
        clock: IClock,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
    ):
        self.secret = secret
        self.clock = clock
        self.algorithm = algorithm
        self.access_token_ttl = timedelta(minutes=access_token_expire_minutes)

    def issue_access_token(self, claims: AccessTokenClaims) -> str:
        issued_at = self.clock.now()
        payload = claims.to_payload(
            issued_at=issued_at, expires_at=issued_at + self.access_token_ttl
        )
        token = jwt_encode(payload, self.secret, algorithm=self.algorithm)
        logger.debug("Access token issued", user_id=claims.user_id)
        return token

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        try:
            payload = jwt_decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
        except PyJWTError as e:
            logger.debug("Access token rejected", error_type=type(e).__name__)
            raise InvalidTokenError("Invalid or expired access token") from e

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        if expires_at <= self.clock.now():
            logger.debug("Access token rejected", error_type="ExpiredSignature")
            raise InvalidTokenError("Invalid or expired access token")

        return AccessTokenClaims(
            user_id=payload["sub"],
            email=payload.get("email", ""),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=expires_at,
        )

    def issue_refresh_token(self) -> str:
        return secrets.token_hex(REFRESH_TOKEN_BYTES)

    def hash_opaque_token(self, raw: str) -> str:
        return hash_opaque_token(raw)
