"""Export the persisted domain entities.

Importing this package registers both tables on ``SQLModel.metadata``.
"""

from .password_reset_token import PasswordResetToken
from .user import User

__all__ = ["User", "PasswordResetToken"]
