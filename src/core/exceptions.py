from __future__ import annotations

"""Structured exception hierarchy for the authentication service.

Every domain failure is raised as a subclass of ``AuthServiceError``. Each one
carries a stable machine-readable ``code``, the HTTP ``status_code`` the API
layer must answer with, a human-readable ``message`` and optional field-level
``details``. A single FastAPI handler renders any of them, so adding a new
error never requires touching the boundary.

The hierarchy is designed to:
- Keep "no such user" and "wrong password" indistinguishable.
- Keep an expired reset token distinct from an unknown or consumed one.
- Map cleanly to HTTP status codes in the API layer.
"""

from typing import Any, Dict, Final, List, Optional

__all__: Final = [
    "AuthServiceError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "ValidationError",
    "ServerError",
    "DatabaseError",
]


class AuthServiceError(Exception):
    """Base exception class for all custom errors in the service.

    Attributes:
        message (str): A human-readable error message, safe to show to clients.
        code (str): A unique, machine-readable error code.
        status_code (int): HTTP status the API layer responds with.
        details (list | None): Optional field-level information.
    """

    message: str = "An unexpected error occurred."
    code: str = "server_error"
    status_code: int = 500

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        if message is not None:
            self.message = message
        self.details = details
        Exception.__init__(self, self.message)

    # A concise, structured representation used by loggers & FastAPI handlers.
    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{code, message, details?}`` error body."""
        body: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ---------------------------------------------------------------------------
# Registration / login errors
# ---------------------------------------------------------------------------


class DuplicateEmailError(AuthServiceError):
    """Raised when a registration targets an email that is already registered.

    Raised both by the availability pre-check and when the database unique
    constraint rejects a concurrent insert. Maps to ``409 Conflict``.
    """

    message = "Email already registered"
    code = "duplicate_email"
    status_code = 409


class InvalidCredentialsError(AuthServiceError):
    """Raised when login credentials do not match a user.

    The same message is used for an unknown email and a wrong password, so the
    response never reveals whether an account exists. Maps to ``401``.
    """

    message = "Invalid email or password"
    code = "invalid_credentials"
    status_code = 401


# ---------------------------------------------------------------------------
# Token errors (400 Bad Request)
# ---------------------------------------------------------------------------


class InvalidTokenError(AuthServiceError):
    """Raised for an unknown, already consumed or malformed token."""

    message = "Invalid or expired reset token"
    code = "invalid_token"
    status_code = 400


class ExpiredTokenError(AuthServiceError):
    """Raised the first time an expired reset token is presented.

    Distinct from ``InvalidTokenError`` so clients can offer to request a new
    link. The token is consumed as a side effect, so a retry reports
    ``invalid_token``.
    """

    message = "Invalid or expired reset token"
    code = "expired_token"
    status_code = 400


class ValidationError(AuthServiceError):
    """Raised when input shape or password strength checks fail.

    ``details`` holds ``{"field": ..., "message": ...}`` entries.
    """

    message = "Validation failed"
    code = "validation_error"
    status_code = 400


# ---------------------------------------------------------------------------
# Server-side errors (500)
# ---------------------------------------------------------------------------


class ServerError(AuthServiceError):
    """Catch-all for storage and unexpected failures. Maps to ``500``."""

    message = "Internal server error"
    code = "server_error"
    status_code = 500


class DatabaseError(ServerError):
    """Wraps low-level database driver errors so that they surface as ``500``."""

    message = "A database error occurred."
