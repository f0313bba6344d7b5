"""
FastAPI dependencies.

The database handle, password hasher and token manager are created by
``create_app`` and stored on ``app.state``; the helpers below expose
them to endpoints.  ``authenticate`` guards the protected routes: it
reads the token from the ``Authorization`` header, verifies it and
stores the account id on ``request.state``.
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import InvalidTokenError
from event_signup_api.app.core.security import PasswordHasher, TokenManager


NOT_AUTHORIZED = "Not authorized."

# The raw token is sent as the header value; ``Bearer <token>`` is accepted too.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.tokens


def _extract_token(header_value: str | None) -> str | None:
    if not header_value:
        return None
    token = header_value.strip()
    scheme, _, credentials = token.partition(" ")
    if credentials and scheme.lower() == "bearer":
        token = credentials.strip()
    return token or None


def authenticate(
    request: Request,
    authorization: str | None = Security(authorization_header),
    tokens: TokenManager = Depends(get_token_manager),
) -> int:
    """Resolve the authenticated account id or reject the request with 401.

    A missing and an invalid token produce the same response.
    """
    token = _extract_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHORIZED)
    try:
        user_id = tokens.verify(token)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHORIZED)
    request.state.user_id = user_id
    return user_id
