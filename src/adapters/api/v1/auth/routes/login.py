"""Login endpoint.

Authenticates email/password, returns the access token in the body and sets
the refresh token as an HttpOnly cookie. Unknown emails and wrong passwords
both answer 401 ``invalid_credentials``.
"""

import structlog
from fastapi import APIRouter, Response, status

from src.adapters.api.v1.auth.schemas import LoginRequest, LoginResponse, UserOut
from src.adapters.api.v1.auth.utils import set_refresh_token_cookie
from src.infrastructure.dependency_injection.auth_dependencies import (
    AppSettings,
    AuthenticationService,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate a user",
    description=(
        "Verifies email and password. On success the access token is returned "
        "in the body and the refresh token is set as an HttpOnly cookie; any "
        "previous session is invalidated."
    ),
)
async def login_user(
    payload: LoginRequest,
    response: Response,
    auth_service: AuthenticationService,
    settings: AppSettings,
):
    result = await auth_service.login(payload.email, payload.password)
    set_refresh_token_cookie(response, result.refresh_token, settings)
    logger.info("User logged in via API", user_id=result.user.id)
    return LoginResponse(
        message="Login successful",
        user=UserOut.from_entity(result.user),
        access_token=result.access_token,
    )
