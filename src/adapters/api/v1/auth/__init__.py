from __future__ import annotations

"""Authentication router package – bundles registration/login/password reset endpoints."""

from fastapi import APIRouter

from .routes import login as login_route
from .routes import password_reset as password_reset_route
from .routes import register as register_route

router = APIRouter(prefix="/auth", tags=["auth"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(register_route.router, prefix="/register")
router.include_router(login_route.router, prefix="/login")
router.include_router(password_reset_route.router, prefix="/password-reset")

__all__ = ["router"]
