from __future__ import annotations

"""Response Pydantic model for user data."""

from pydantic import BaseModel

from src.domain.entities.user import User


class UserOut(BaseModel):
    """Public projection of :class:`~src.domain.entities.user.User`.

    Only ``id`` and ``email``; credential and session hashes are never
    serialized.
    """

    id: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(id=user.id, email=user.email)
