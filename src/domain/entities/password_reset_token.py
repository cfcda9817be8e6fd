"""Password reset token entity.

A row is created for every reset request made for an existing account. Only
the SHA-256 of the raw token is stored; the raw value exists solely in the
email sent to the user.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Column, Field, SQLModel, String


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PasswordResetToken(SQLModel, table=True):
    """Single-use, expiring credential that authorizes one password change.

    Attributes:
        id: Opaque unique identifier.
        user_id: Owning user. A weak reference: no cascade is declared.
        token_hash: SHA-256 hex digest of the raw token. Unique.
        expires_at: Moment after which the token can no longer be confirmed.
        used: Set once the token is consumed or found expired. Never reset.
        created_at: Creation timestamp.
        updated_at: Last mutation timestamp.
    """

    __tablename__ = "password_reset_tokens"
    __table_args__ = {"extend_existing": True}

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        max_length=36,
    )
    user_id: str = Field(index=True, max_length=36)
    token_hash: str = Field(
        sa_column=Column("token_hash", String(64), unique=True, index=True, nullable=False),
    )
    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    used: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    def is_expired(self, now: datetime) -> bool:
        """True when ``expires_at`` lies strictly before ``now``."""
        return as_utc(self.expires_at) < as_utc(now)
