"""Service interfaces the domain depends on.

These are the "ports" for cryptography, time and transactions. Concrete
adapters live under `src.infrastructure`.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from types import TracebackType
from typing import Callable, Optional, Type

from src.domain.interfaces.repositories import (
    IPasswordResetTokenRepository,
    IUserRepository,
)
from src.domain.value_objects.jwt_token import AccessTokenClaims


class IPasswordHasher(ABC):
    """Slow, salted one-way password hashing."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool:
        """Checks ``password`` against ``password_hash``.

        Returns `False` (never raises) for malformed hashes.
        """
        raise NotImplementedError

    @abstractmethod
    async def verify_dummy(self, password: str) -> None:
        """Burns the same work as a real verification.

        Called when no account matches so that unknown emails and wrong
        passwords take comparable time.
        """
        raise NotImplementedError


class ITokenService(ABC):
    """Issues access tokens and opaque refresh tokens."""

    @abstractmethod
    def issue_access_token(self, claims: AccessTokenClaims) -> str:
        """Signs a compact access token carrying ``claims``."""
        raise NotImplementedError

    @abstractmethod
    def verify_access_token(self, token: str) -> AccessTokenClaims:
        """Verifies signature and expiry.

        Raises:
            InvalidTokenError: If the token is malformed, tampered or expired.
        """
        raise NotImplementedError

    @abstractmethod
    def issue_refresh_token(self) -> str:
        """Returns a fresh random refresh token."""
        raise NotImplementedError

    @abstractmethod
    def hash_opaque_token(self, raw: str) -> str:
        """Deterministic SHA-256 hex digest used to store opaque tokens."""
        raise NotImplementedError


class IClock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Timezone-aware UTC now."""
        raise NotImplementedError


class IUnitOfWork(ABC):
    """A single database transaction and the repositories bound to it.

    Used as an async context manager. Leaving the block without calling
    `commit` rolls back.
    """

    users: IUserRepository
    reset_tokens: IPasswordResetTokenRepository

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        raise NotImplementedError

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], IUnitOfWork]
