"""
Error taxonomy and the exception handlers that render it.

Handlers and stores raise the exceptions defined here; they are turned
into ``{"error": <message>}`` JSON responses with the matching status
code by the handlers that ``register_exception_handlers`` installs on
the application.  Store failures are logged in full server‑side and
reach the client as an opaque 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class MissingCredential(Unauthorized):
    default_message = "Authorization header missing"


class MalformedCredential(Unauthorized):
    default_message = "Bearer token missing or malformed"


class InvalidSignature(Unauthorized):
    default_message = "Invalid token signature"


class InvalidClaims(Unauthorized):
    default_message = "Invalid token claims"


class SubjectNotFound(Unauthorized):
    default_message = "User not found"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class DuplicateAttendee(Conflict):
    default_message = "User is already an attendee of this event"


class StoreError(AppError):
    """A persistence call failed (as opposed to finding nothing)."""

    default_message = "Store operation failed"


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install handlers that render every failure as ``{"error": ...}``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
            message = exc.message if debug else INTERNAL_ERROR_MESSAGE
            return _error_response(exc.status_code, message)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = "Invalid request data"
        if errors:
            location = errors[0].get("loc", ())
            if len(location) >= 2 and location[0] == "path":
                message = "Invalid user ID" if location[1] == "user_id" else "Invalid event ID"
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        message = str(exc) if debug else INTERNAL_ERROR_MESSAGE
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
