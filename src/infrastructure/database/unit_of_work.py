"""SQLAlchemy Unit of Work.

One ``SqlAlchemyUnitOfWork`` wraps one ``AsyncSession`` and therefore one
transaction. Repositories are bound to that session on entry, so every write
made through ``uow.users`` and ``uow.reset_tokens`` commits or rolls back
together.
"""

from types import TracebackType
from typing import Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.core.exceptions import DatabaseError
from src.domain.interfaces.services import IUnitOfWork
from src.infrastructure.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from src.infrastructure.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class SqlAlchemyUnitOfWork(IUnitOfWork):
    """Transaction boundary over a fresh ``AsyncSession``.

    Leaving the ``async with`` block without ``commit()`` discards the
    transaction, and an exception raised inside it rolls back. Entities read
    inside the block stay readable after it exits: the session is closed,
    which detaches them with their loaded attributes intact.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of its context")
        return self._session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.users = UserRepository(self._session)
        self.reset_tokens = PasswordResetTokenRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                logger.debug("unit_of_work_rollback", error_type=exc_type.__name__)
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("unit_of_work_commit_failed", error=str(e), error_type=type(e).__name__)
            raise DatabaseError() from e

    async def rollback(self) -> None:
        # Detach first so rollback does not expire entities already handed out.
        self.session.expunge_all()
        await self.session.rollback()
