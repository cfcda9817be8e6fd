from __future__ import annotations

"""Request‐payload Pydantic models for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.domain.value_objects.password import Password

# ---------------------------------------------------------------------------
# Shared validators ----------------------------------------------------------
# ---------------------------------------------------------------------------


def _check_password_strength(value: str) -> str:
    problems = Password.policy_violations(value)
    if problems:
        raise ValueError(problems[0])
    return value


# ---------------------------------------------------------------------------
# Concrete request models ----------------------------------------------------
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Payload expected by ``POST /auth/register``."""

    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["Str0ngPassw0rd"])

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        return _check_password_strength(value)


class LoginRequest(BaseModel):
    """Payload expected by ``POST /auth/login``."""

    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=1, examples=["Str0ngPassw0rd"])


class PasswordResetRequest(BaseModel):
    """Payload expected by ``POST /auth/password-reset/request``."""

    email: EmailStr = Field(
        ...,
        examples=["john@example.com"],
        description="Email address to send password reset instructions to",
    )


class PasswordResetConfirmRequest(BaseModel):
    """Payload expected by ``POST /auth/password-reset/confirm``."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(
        ...,
        min_length=1,
        examples=["a1b2c3d4e5f6..."],
        description="Password reset token received via email",
    )
    new_password: str = Field(
        ...,
        alias="newPassword",
        examples=["NewSecurePass123"],
        description="New password that meets security policy requirements",
    )

    @field_validator("new_password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        return _check_password_strength(value)
