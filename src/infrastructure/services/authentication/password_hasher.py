"""Bcrypt password hashing.

Uses passlib's ``CryptContext`` with a configurable work factor. bcrypt is
CPU-bound, so every call is pushed to the threadpool to keep the event loop
responsive while a login or registration is being processed.
"""

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from src.domain.interfaces.services import IPasswordHasher

logger = get_logger(__name__)

# Verified against when no account matches the submitted email.
_DUMMY_PASSWORD = "dummy-password-for-timing"


class PasswordHasher(IPasswordHasher):
    """``IPasswordHasher`` backed by passlib bcrypt.

    Attributes:
        pwd_context (CryptContext): Passlib context for bcrypt password hashing.
    """

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )
        self._dummy_hash = self.pwd_context.hash(_DUMMY_PASSWORD)

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.pwd_context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await run_in_threadpool(self.pwd_context.verify, password, password_hash)
        except (ValueError, TypeError) as e:
            # Malformed or unknown hash format.
            logger.warning("password_hash_unverifiable", error_type=type(e).__name__)
            return False

    async def verify_dummy(self, password: str) -> None:
        await run_in_threadpool(self.pwd_context.verify, password, self._dummy_hash)
