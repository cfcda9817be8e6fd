"""Infrastructure Authentication Services.

Concrete implementations of the credential hashing and token issuance ports.
They are injected into domain services by the dependency injection module.
"""

from .password_hasher import PasswordHasher
from .token_service import TokenService, hash_opaque_token

__all__ = [
    "PasswordHasher",
    "TokenService",
    "hash_opaque_token",
]
