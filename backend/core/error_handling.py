# backend/core/error_handling.py

"""
Error handling utilities for API routes.
"""

from typing import Callable, Dict, Any, Optional
from functools import wraps
import logging
import inspect
import traceback

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, DataError, OperationalError
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} with identifier {identifier} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "identifier": str(identifier)},
        )


class ConflictError(APIError):
    """Resource conflict error"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message, status_code=status.HTTP_409_CONFLICT, details=details
        )


class APIValidationError(APIError):
    """Input validation error - named to avoid clashing with Pydantic's ValidationError"""

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"validation_errors": errors} if errors else {},
        )


def _raise_http_exception(e: Exception, func_name: str) -> None:
    if isinstance(e, HTTPException):
        raise e

    if isinstance(e, APIError):
        logger.warning(
            f"API Error in {func_name}: {e.message}",
            extra={"status_code": e.status_code, "details": e.details},
        )
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": e.message, "details": e.details},
        )

    if isinstance(e, ValidationError):
        logger.warning(f"Pydantic validation error in {func_name}: {e.errors()}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Request validation failed", "errors": e.errors()},
        )

    if isinstance(e, ValueError):
        logger.warning(f"Validation error in {func_name}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail={"message": str(e)}
        )

    if isinstance(e, IntegrityError):
        logger.error(f"Database integrity error in {func_name}: {str(e.orig)}")
        error_info = str(e.orig).lower() if e.orig else str(e).lower()
        if "unique" in error_info or "duplicate" in error_info:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "message": "Resource already exists with the provided unique values",
                    "type": "unique_violation",
                },
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Database constraint violation",
                "type": "integrity_error",
            },
        )

    if isinstance(e, DataError):
        logger.error(f"Data error in {func_name}: {str(e.orig)}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid data format or type", "type": "data_error"},
        )

    if isinstance(e, OperationalError):
        logger.error(f"Database operational error in {func_name}: {str(e.orig)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "message": "Database service temporarily unavailable",
                "type": "operational_error",
            },
        )

    logger.error(f"Unexpected error in {func_name}: {str(e)}\n{traceback.format_exc()}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": "An unexpected error occurred", "type": type(e).__name__},
    )


def handle_api_errors(func: Callable) -> Callable:
    """
    Decorator translating service errors into HTTP responses.
    Works for both async and sync route handlers.

    Usage:
        @router.get("/items/{item_id}")
        @handle_api_errors
        async def get_item(item_id: int, db: Session = Depends(get_db)):
            ...
    """

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _raise_http_exception(e, func.__name__)

        return async_wrapper

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            _raise_http_exception(e, func.__name__)

    return sync_wrapper
