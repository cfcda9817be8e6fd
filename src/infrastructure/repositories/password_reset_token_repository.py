"""Password reset token repository.

Tokens are looked up only by the SHA-256 of their raw value. Consumption is a
single conditional ``UPDATE ... WHERE used = false`` so that the database, not
the application, decides which of two concurrent confirmations wins.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from src.domain.entities.password_reset_token import PasswordResetToken
from src.domain.interfaces.repositories import IPasswordResetTokenRepository

logger = get_logger(__name__)


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """SQLAlchemy implementation of ``IPasswordResetTokenRepository``."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def add(self, token: PasswordResetToken) -> PasswordResetToken:
        self.db_session.add(token)
        await self.db_session.flush()
        logger.debug("Reset token stored", token_id=token.id, user_id=token.user_id)
        return token

    async def get_unused_by_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        statement = select(PasswordResetToken).where(
            PasswordResetToken.token_hash == token_hash,
            PasswordResetToken.used.is_(False),
        )
        result = await self.db_session.execute(statement)
        return result.scalars().first()

    async def mark_used_if_unused(self, token_id: str, now: datetime) -> bool:
        statement = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used.is_(False),
            )
            .values(used=True, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.db_session.execute(statement)
        won = result.rowcount == 1
        logger.debug("Reset token consume attempted", token_id=token_id, won=won)
        return won
