"""Access token claim set."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AccessTokenClaims:
    """The compact claim set carried by a signed access token.

    Attributes:
        user_id: Subject of the token (``sub``).
        email: Normalized email of the subject.
        issued_at: ``iat``; populated when decoding.
        expires_at: ``exp``; populated when decoding.
    """

    user_id: str
    email: str
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def to_payload(self, issued_at: datetime, expires_at: datetime) -> Dict[str, Any]:
        return {
            "sub": self.user_id,
            "email": self.email,
            "iat": issued_at,
            "exp": expires_at,
        }
