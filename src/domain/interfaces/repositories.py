"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as a "port" in the context of Hexagonal Architecture. The domain layer
uses these interfaces to interact with persistence without being coupled to a
specific database.

The concrete implementations of these interfaces reside in the `infrastructure`
layer and operate on the session owned by the current unit of work.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities.password_reset_token import PasswordResetToken
from src.domain.entities.user import User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    This repository is responsible for managing the lifecycle of the `User`
    aggregate root. Emails passed in are expected to be normalized already.
    """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The opaque ID of the user.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their normalized email address.

        Args:
            email: The normalized email address to search for.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def add(self, user: User) -> User:
        """Inserts a new user and flushes it so uniqueness is checked now.

        Args:
            user: The `User` entity to insert.

        Returns:
            The persisted `User` entity.

        Raises:
            DuplicateEmailError: If the store already holds a user with the
                same email, including one inserted concurrently.
        """
        raise NotImplementedError

    @abstractmethod
    async def set_refresh_token_hash(
        self, user_id: str, refresh_token_hash: Optional[str], now: datetime
    ) -> bool:
        """Replaces the user's single session marker.

        Returns:
            `True` if a user row was updated.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password_and_clear_sessions(
        self, user_id: str, password_hash: str, now: datetime
    ) -> bool:
        """Stores a new password hash and clears the refresh token hash.

        Returns:
            `True` if a user row was updated.
        """
        raise NotImplementedError


class IPasswordResetTokenRepository(ABC):
    """An interface for persisting single-use password reset tokens."""

    @abstractmethod
    async def add(self, token: PasswordResetToken) -> PasswordResetToken:
        """Inserts a new reset token record."""
        raise NotImplementedError

    @abstractmethod
    async def get_unused_by_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Finds the token stored under ``token_hash`` whose ``used`` flag is unset.

        Args:
            token_hash: SHA-256 hex digest of the raw token.

        Returns:
            The matching token or `None` when it is unknown or already used.
        """
        raise NotImplementedError

    @abstractmethod
    async def mark_used_if_unused(self, token_id: str, now: datetime) -> bool:
        """Atomically flips ``used`` from false to true.

        This is a single conditional write, so of two concurrent callers for
        the same token exactly one observes `True`.

        Returns:
            `True` if this call performed the transition.
        """
        raise NotImplementedError
