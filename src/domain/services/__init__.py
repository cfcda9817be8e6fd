"""Domain Services for the Authentication Bounded Context.

Authentication Domain Services:
- User Registration: account creation with two-layer duplicate protection
- User Authentication: credential login and session token issuance

Password Reset Services:
- Password Reset Request: token creation and reset email
- Password Reset: single-use token consumption and password replacement
"""

from .authentication.user_authentication_service import LoginResult, UserAuthenticationService
from .authentication.user_registration_service import UserRegistrationService
from .password_reset.password_reset_request_service import PasswordResetRequestService
from .password_reset.password_reset_service import PasswordResetService

__all__ = [
    "LoginResult",
    "PasswordResetRequestService",
    "PasswordResetService",
    "UserAuthenticationService",
    "UserRegistrationService",
]
