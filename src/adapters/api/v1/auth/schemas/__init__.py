from __future__ import annotations

"""Authentication API schemas package.

Request and response models are split into focused modules and re-exported
here so routes and tests can import from
``src.adapters.api.v1.auth.schemas``.
"""

# flake8: noqa: F401 – re-export

from .misc import MessageResponse
from .requests import (
    LoginRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    RegisterRequest,
)
from .responses.auth import LoginResponse, RegisterResponse
from .responses.user import UserOut

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "PasswordResetRequest",
    "PasswordResetConfirmRequest",
    "UserOut",
    "RegisterResponse",
    "LoginResponse",
    "MessageResponse",
]
