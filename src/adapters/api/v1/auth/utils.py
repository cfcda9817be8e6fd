from __future__ import annotations

"""Utility functions for authentication API routes."""

from fastapi import Response

from src.core.config.settings import Settings

REFRESH_TOKEN_COOKIE = "refreshToken"


def set_refresh_token_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    """Attach the refresh token as an HttpOnly cookie.

    Domain, path, ``Secure`` and ``SameSite`` come from configuration; the
    cookie lives as long as the refresh token is meant to.
    """
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        domain=settings.COOKIE_DOMAIN or None,
        path=settings.COOKIE_PATH,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite=settings.COOKIE_SAMESITE,
    )
