from __future__ import annotations

"""Composite response Pydantic models for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from src.adapters.api.v1.auth.schemas.responses.user import UserOut


class RegisterResponse(BaseModel):
    """Response returned by the register endpoint."""

    message: str
    user: UserOut


class LoginResponse(BaseModel):
    """Response returned by the login endpoint.

    The refresh token travels only in the HttpOnly cookie.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    user: UserOut
    access_token: str = Field(..., alias="accessToken")
