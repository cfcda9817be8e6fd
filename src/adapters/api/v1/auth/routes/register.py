"""Registration endpoint.

The API layer stays thin: request-shape validation happens in the pydantic
model and everything else is delegated to ``UserRegistrationService``. Domain
errors propagate to the registered exception handlers.
"""

import structlog
from fastapi import APIRouter, status

from src.adapters.api.v1.auth.schemas import RegisterRequest, RegisterResponse, UserOut
from src.infrastructure.dependency_injection.auth_dependencies import RegistrationService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description=(
        "Creates an account for a unique email and a password that meets the "
        "strength policy. Responds 409 `duplicate_email` if the email is taken."
    ),
)
async def register_user(payload: RegisterRequest, registration_service: RegistrationService):
    user = await registration_service.register(payload.email, payload.password)
    logger.info("User registered via API", user_id=user.id)
    return RegisterResponse(
        message="User registered successfully",
        user=UserOut.from_entity(user),
    )
