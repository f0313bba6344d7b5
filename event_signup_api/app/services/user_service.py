"""
Business logic for accounts.

Signup hashes the password before anything is written, so the users
table only ever sees the bcrypt hash.  Login looks the account up by
e-mail and verifies the hash; an unknown e-mail and a wrong password
raise the same ``InvalidCredentialsError`` so callers cannot tell them
apart.
"""

import logging
import sqlite3
from typing import Optional

from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import InvalidCredentialsError, PersistenceError
from event_signup_api.app.core.security import PasswordHasher
from event_signup_api.app.schemas.user import StoredCredentials, UserCreate, UserLogin


logger = logging.getLogger(__name__)


class UserService:
    """Service for signing up and authenticating accounts."""

    @classmethod
    def create_user(cls, db: Database, hasher: PasswordHasher, data: UserCreate) -> int:
        """Insert a new account and return its id.

        Raises ``HashError`` if the password cannot be hashed and
        ``PersistenceError`` if the insert fails (including a duplicate
        e-mail).
        """
        hashed_password = hasher.hash(data.password)
        try:
            with db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (email, password) VALUES (?, ?)",
                    (data.email, hashed_password),
                )
                user_id = cursor.lastrowid
        except sqlite3.Error as exc:
            logger.warning("Could not create user: %s", type(exc).__name__)
            raise PersistenceError("Could not save user.") from exc
        logger.info("Created user %s", user_id)
        return user_id

    @classmethod
    def get_credentials(cls, db: Database, email: str) -> Optional[StoredCredentials]:
        """Return the id and password hash stored for ``email``."""
        try:
            with db.cursor() as cursor:
                row = cursor.execute(
                    "SELECT id, password FROM users WHERE email = ?",
                    (email,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Credential lookup failed")
            raise PersistenceError() from exc
        if row is None:
            return None
        return StoredCredentials(id=row["id"], password_hash=row["password"])

    @classmethod
    def validate_credentials(cls, db: Database, hasher: PasswordHasher, data: UserLogin) -> int:
        """Return the account id when e-mail and password match."""
        stored = cls.get_credentials(db, data.email)
        if stored is None or not hasher.verify(data.password, stored.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        return stored.id
