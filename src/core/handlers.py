from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

This module contains centralized handlers translating exceptions into the
``{"error": {"code", "message", "details"?}}`` response body. Every
``AuthServiceError`` subclass carries its own status code, so one handler
covers the whole domain hierarchy.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog import get_logger

from src.core.exceptions import AuthServiceError, ServerError, ValidationError

__all__ = [
    "auth_service_error_handler",
    "request_validation_error_handler",
    "http_exception_handler",
    "unhandled_exception_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


def _error_response(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": body})


async def auth_service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    """Handles any `AuthServiceError` using the status code it carries.

    Args:
        request: The incoming `Request` object.
        exc: The `AuthServiceError` instance.

    Returns:
        A `JSONResponse` with the error's status code and body.
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request failed with domain error",
        error_code=exc.code,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return _error_response(exc.status_code, exc.to_dict())


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else error.get("msg", "Invalid value")
        details.append({"field": ".".join(loc) or "body", "message": message})
    return details


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handles malformed request bodies, returning a `400 Bad Request`.

    Field-level problems are reported as ``details``.
    """
    error = ValidationError(details=_field_errors(exc))
    logger.info(
        "Request validation failed",
        path=request.url.path,
        fields=[detail["field"] for detail in error.details],
    )
    return _error_response(error.status_code, error.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handles routing-level HTTP errors such as unknown paths."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = {"code": "not_found", "message": "Resource not found"}
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        body = {"code": "method_not_allowed", "message": "Method not allowed"}
    else:
        body = {"code": "http_error", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content={"error": body}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handles anything else, returning a generic `500 Internal Server Error`.

    The traceback is logged; the response never includes it.
    """
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _error_response(ServerError.status_code, ServerError().to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all exception handlers with the FastAPI application.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(AuthServiceError, auth_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
