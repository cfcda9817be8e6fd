"""Domain Value Objects for the authentication domain.

Value objects are immutable objects that describe domain concepts by their attributes
rather than their identity.
"""

from .email import Email
from .jwt_token import AccessTokenClaims
from .password import Password
from .reset_token import ResetToken

__all__ = [
    "AccessTokenClaims",
    "Email",
    "Password",
    "ResetToken",
]
