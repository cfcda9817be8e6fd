"""Password reset endpoints.

``/request`` answers the same body for every outcome (unknown account,
delivery failure, success) so it cannot be used to discover registered
emails. ``/confirm`` consumes a single-use token and replaces the password.
"""

from fastapi import APIRouter, status

from src.adapters.api.v1.auth.schemas import (
    MessageResponse,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
)
from src.infrastructure.dependency_injection.auth_dependencies import (
    ResetConfirmService,
    ResetRequestService,
)

router = APIRouter()

RESET_REQUESTED_MESSAGE = (
    "If an account exists with this email, a password reset link has been sent."
)
RESET_COMPLETED_MESSAGE = (
    "Password has been reset successfully. Please log in with your new password."
)


@router.post(
    "/request",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Request a password reset email",
)
async def request_password_reset(payload: PasswordResetRequest, reset_service: ResetRequestService):
    await reset_service.request_reset(payload.email)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post(
    "/confirm",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password with a reset token",
    description=(
        "Responds 400 `invalid_token` for unknown or already used tokens and "
        "400 `expired_token` the first time an expired token is presented."
    ),
)
async def confirm_password_reset(
    payload: PasswordResetConfirmRequest, reset_service: ResetConfirmService
):
    await reset_service.confirm_reset(payload.token, payload.new_password)
    return MessageResponse(message=RESET_COMPLETED_MESSAGE)
