# backend/core/exceptions.py

"""
Application-level exception handlers.

Errors that escape the route decorators are converted here so every error
response shares the same ``{"detail", "error_code", "path"}`` shape.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .error_handling import APIError

logger = logging.getLogger(__name__)


def _error_response(
    request: Request, status_code: int, detail: Any, error_code: str
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "error_code": error_code,
            "path": request.url.path,
        },
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Domain errors raised from undecorated handlers or dependencies"""
    return _error_response(
        request,
        exc.status_code,
        {"message": exc.message, "details": exc.details},
        type(exc).__name__,
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning(f"ValueError at {request.url.path}: {exc}")
    return _error_response(
        request, status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR"
    )


async def handle_key_error(request: Request, exc: KeyError) -> JSONResponse:
    logger.warning(f"KeyError at {request.url.path}: {exc}")
    return _error_response(
        request,
        status.HTTP_404_NOT_FOUND,
        f"Resource not found: {exc}",
        "NOT_FOUND",
    )


def register_exception_handlers(app: FastAPI):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(KeyError, handle_key_error)
