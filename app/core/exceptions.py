"""Application error taxonomy and the FastAPI handlers that render it as {"message": ...}.

Services raise these typed errors instead of ValueError so routes need no per-call HTTPException mapping.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    default_message = "All fields are required"


class ConflictError(AppError):
    default_message = "Resource already exists"


class AuthError(AppError):
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication token is missing"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired authentication token"


class NotFoundError(AppError):
    default_message = "Not found"


class InvalidTokenError(AppError):
    default_message = "Invalid password reset token"


class ExpiredTokenError(AppError):
    default_message = "Password reset token has expired"


class InternalError(AppError):
    """Unexpected failure; details are logged, never returned to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = INTERNAL_ERROR_MESSAGE


class EmailDeliveryError(InternalError):
    default_message = "Could not send the password reset email"


class SearchProviderError(InternalError):
    default_message = "Video search is unavailable"


def _message_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return _message_response(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _message_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
