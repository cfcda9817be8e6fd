"""User Repository implementation using SQLAlchemy.

This module provides the repository pattern implementation for ``User``
persistence. It runs on the session owned by the current unit of work and
never commits on its own; the caller decides the transaction boundary.

Emails are compared in their normalized (trimmed, lowercased) form, which is
also the form they are stored in, so the unique index on ``users.email``
gives case-insensitive uniqueness.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from src.core.exceptions import DatabaseError, DuplicateEmailError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.value_objects.email import mask_email

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"


def _is_email_conflict(error: IntegrityError) -> bool:
    """True when ``error`` is the unique index on ``users.email`` firing.

    PostgreSQL reports SQLSTATE 23505 naming ``ix_users_email``; SQLite reports
    ``UNIQUE constraint failed: users.email``.
    """
    orig = error.orig
    message = str(orig).lower()
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None and code != UNIQUE_VIOLATION:
        return False
    return ("unique" in message or code == UNIQUE_VIOLATION) and "email" in message


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of ``IUserRepository``."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        statement = select(User).where(User.id == user_id)
        result = await self.db_session.execute(statement)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email.

        Args:
            email: Email address; normalized again here so callers cannot
                bypass case-insensitivity.

        Returns:
            User entity if found, None otherwise
        """
        email_value = User.normalize_email(email)
        statement = select(User).where(User.email == email_value)
        result = await self.db_session.execute(statement)
        user = result.scalars().first()

        logger.debug(
            "User lookup by email completed",
            email=mask_email(email_value),
            found=user is not None,
            operation="get_by_email",
        )
        return user

    async def add(self, user: User) -> User:
        """Insert a new user and flush so the unique index is checked now.

        Raises:
            DuplicateEmailError: When the email is already taken. This also
                covers a concurrent registration that slipped past the
                caller's pre-check.
            DatabaseError: For any other storage failure.
        """
        user.email = User.normalize_email(user.email)
        self.db_session.add(user)
        try:
            await self.db_session.flush()
        except IntegrityError as e:
            await self.db_session.rollback()
            if not _is_email_conflict(e):
                logger.error(
                    "User insert violated a constraint",
                    operation="add",
                    error=str(e.orig),
                    error_type=type(e).__name__,
                )
                raise DatabaseError() from e
            logger.info(
                "User insert rejected by unique constraint",
                email=mask_email(user.email),
                operation="add",
                error_type=type(e).__name__,
            )
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "User insert failed",
                operation="add",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DatabaseError() from e

        logger.debug("User inserted", user_id=user.id, operation="add")
        return user

    async def set_refresh_token_hash(
        self, user_id: str, refresh_token_hash: Optional[str], now: datetime
    ) -> bool:
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token_hash=refresh_token_hash, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.db_session.execute(statement)
        return result.rowcount == 1

    async def update_password_and_clear_sessions(
        self, user_id: str, password_hash: str, now: datetime
    ) -> bool:
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash, refresh_token_hash=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.db_session.execute(statement)
        updated = result.rowcount == 1
        logger.debug(
            "User password updated",
            user_id=user_id,
            updated=updated,
            operation="update_password_and_clear_sessions",
        )
        return updated
