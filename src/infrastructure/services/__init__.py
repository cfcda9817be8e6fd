"""Infrastructure Services.

Concrete implementations of the domain service ports.

Service Categories:
- Authentication: bcrypt hashing, access and refresh token issuance
- Email: reset message rendering and delivery (console or SMTP)
- Clock: wall-clock time source
"""

from .authentication import PasswordHasher, TokenService
from .clock import SystemClock

__all__ = [
    "PasswordHasher",
    "SystemClock",
    "TokenService",
]
