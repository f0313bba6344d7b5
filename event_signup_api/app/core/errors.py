"""
Error types shared by the services and the HTTP layer.

Services raise one of the classes below; the endpoints translate them
into responses.  Each error carries a human readable ``message`` and
the HTTP ``status_code`` used when it reaches the exception handler
without being translated by an endpoint first.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class EventApiError(Exception):
    """Base application error."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ParseError(EventApiError):
    """Malformed or missing request body or path parameter."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Could not parse request data."


class AuthError(EventApiError):
    """The caller is not allowed to perform the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized."


class InvalidTokenError(AuthError):
    """Missing, malformed, forged or expired access token."""


class InvalidCredentialsError(AuthError):
    """Unknown e-mail or wrong password."""

    default_message = "Could not authenticate user."


class NotOwnerError(AuthError):
    """Authenticated, but not the owner of the record being changed."""


class NotFoundError(EventApiError):
    """A lookup returned no row."""

    default_message = "Could not fetch the requested record."


class PersistenceError(EventApiError):
    """An insert, update, delete or query failed in the database."""

    default_message = "Database operation failed."


class AlreadyRegisteredError(PersistenceError):
    """The account is already registered for the event."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already registered for this event."


class HashError(EventApiError):
    """Password hashing failed."""

    default_message = "Could not hash password."


class SigningError(EventApiError):
    """Access token could not be signed."""

    default_message = "Could not issue access token."


def _message_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def app_error_handler(request: Request, exc: EventApiError) -> JSONResponse:
    """Render an untranslated application error."""
    logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return _message_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render ``HTTPException`` with the ``{"message": ...}`` body used by every endpoint."""
    return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request validation failures to 400.

    Path parameters and JSON bodies get different messages so clients
    can tell a bad event id from a bad payload.
    """
    errors = exc.errors()
    # Only locations and types are logged; inputs may contain passwords.
    summary = [(".".join(str(part) for part in err.get("loc", ())), err.get("type")) for err in errors]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, summary)
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        return _message_response(status.HTTP_400_BAD_REQUEST, "Could not parse event id.")
    return _message_response(status.HTTP_400_BAD_REQUEST, ParseError.default_message)
