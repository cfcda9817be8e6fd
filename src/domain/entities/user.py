import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Column, Field, SQLModel, String


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Represents a User entity and acts as an Aggregate Root.

    This class models a registered account: its identity, its credential hash
    and the marker of its single currently valid session.

    Attributes:
        id: Opaque unique identifier (UUID4 string).
        email: Unique, case-insensitive email address. Stored lowercased and
            trimmed; uniqueness is enforced by the database itself.
        password_hash: Salted bcrypt hash of the password.
        refresh_token_hash: SHA-256 of the refresh token issued by the most
            recent login. ``None`` means no valid session.
        created_at: The timestamp of when the user account was created.
        updated_at: The timestamp of the last update to the user's record.
    """

    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id: str = Field(
        default_factory=_new_id,
        primary_key=True,
        max_length=36,
        description="The unique identifier for the user.",
    )
    email: str = Field(
        sa_column=Column("email", String(255), unique=True, index=True, nullable=False),
        description="Unique, case-insensitive email address used for login.",
    )
    password_hash: str = Field(
        max_length=255,
        description="Bcrypt-hashed password.",
    )
    refresh_token_hash: Optional[str] = Field(
        default=None,
        max_length=64,
        description="SHA-256 hex digest of the current refresh token.",
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp of when the user account was created.",
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp of the last update to the user's record.",
    )

    @staticmethod
    def normalize_email(email: str) -> str:
        """Lowercases and trims an email so lookups and storage agree."""
        return email.strip().lower()
