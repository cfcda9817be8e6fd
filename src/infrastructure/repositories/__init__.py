"""Repository implementations for the infrastructure layer."""

from .password_reset_token_repository import PasswordResetTokenRepository
from .user_repository import UserRepository

__all__ = ["PasswordResetTokenRepository", "UserRepository"]
