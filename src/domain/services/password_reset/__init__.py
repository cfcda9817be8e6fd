"""Password Reset Domain Services.

This module contains domain services that orchestrate password reset operations
following Domain-Driven Design principles and single responsibility principle.
"""

from .password_reset_request_service import PasswordResetRequestService
from .password_reset_service import PasswordResetService

__all__ = [
    "PasswordResetRequestService",
    "PasswordResetService",
]
