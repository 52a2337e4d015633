"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Domain errors carry an
error_code that decides the HTTP status; every error body has the shape
{error, message, details?, request_id}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from casehub.core.config import get_settings
from casehub.domain.exceptions import CasehubException

logger = logging.getLogger(__name__)

ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "INVALID_TRANSITION": 409,
    "INCONSISTENT_TRANSFER": 422,
    # History unknown, not empty: clients may retry.
    "RETRIEVAL_FAILURE": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def _body(request: Request, content: dict[str, Any]) -> dict[str, Any]:
    request_id = request.scope.get("state", {}).get("request_id")
    if request_id:
        content["request_id"] = request_id
    return content


def _casehub_exception_handler(request: Request, exc: CasehubException) -> JSONResponse:
    status = ERROR_CODE_STATUS.get(exc.error_code, 400)
    headers: dict[str, str] = {}
    if status == 401:
        headers["WWW-Authenticate"] = "Bearer"
    elif status == 503:
        headers["Retry-After"] = "5"
        logger.warning("%s %s -> %s", request.method, request.url.path, exc.message)
    elif status == 403:
        logger.info("Denied %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status, content=_body(request, exc.to_dict()), headers=headers or None
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_body(
            request,
            {
                "error": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": exc.errors(),
            },
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, {"error": "HTTP_ERROR", "message": exc.detail}),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    detail = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=_body(request, {"error": "INTERNAL_ERROR", "message": detail}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(CasehubException, _casehub_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
