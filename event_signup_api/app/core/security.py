"""
Password hashing and access token helpers.

``PasswordHasher`` wraps bcrypt with a work factor fixed for the
lifetime of the process.  ``TokenManager`` issues and verifies HS256
JSON Web Tokens with PyJWT.  Tokens carry the account e-mail, the
account id (``userId``) and an ``exp`` claim; they are valid for two
hours by default.

Both objects are created by the application factory from ``Settings``
and shared through ``app.state``; neither keeps mutable state, so they
are safe to use from concurrent requests.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from .errors import HashError, InvalidTokenError, SigningError


logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=2)


class PasswordHasher:
    """Salted, cost-parameterised password hashing with bcrypt."""

    def __init__(self, rounds: int = 14):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of ``password``.

        Raises ``HashError`` when bcrypt refuses the input (for example a
        password longer than 72 bytes).
        """
        try:
            hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as exc:
            raise HashError() from exc
        return hashed.decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Check ``password`` against a stored hash.

        Never raises: a mismatch, a malformed hash or an oversized
        password all return ``False``.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenClaims(BaseModel):
    """Claims embedded in every access token."""

    model_config = ConfigDict(extra="ignore")

    email: StrictStr
    userId: StrictInt
    exp: int


class TokenManager:
    """Issue and verify signed, time limited access tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl: Optional[timedelta] = None):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl or DEFAULT_TOKEN_TTL

    def issue(self, email: str, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a token for ``user_id`` expiring ``ttl`` after ``now``."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "email": email,
            "userId": user_id,
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.error("Could not sign token for user %s: %s", user_id, exc)
            raise SigningError() from exc

    def verify(self, token: str) -> int:
        """Return the account id carried by ``token``.

        Only the configured HMAC algorithm is accepted, so a token whose
        header names another algorithm (or ``none``) is rejected.  Any
        failure raises the same ``InvalidTokenError``.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
            claims = TokenClaims.model_validate(payload)
        except jwt.ExpiredSignatureError as exc:
            logger.debug("Access token expired")
            raise InvalidTokenError() from exc
        except (jwt.PyJWTError, ValidationError) as exc:
            logger.warning("Rejected access token: %s", type(exc).__name__)
            raise InvalidTokenError() from exc
        return claims.userId
