"""
Business logic for event registrations.

A registration is the (event, account) pair stored in the
``registrations`` join table.  A unique index allows one registration
per pair; registering twice raises ``AlreadyRegisteredError``.
Cancelling a registration that does not exist deletes nothing and is
not an error.
"""

import logging
import sqlite3

from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import AlreadyRegisteredError, PersistenceError


logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for registering accounts to events."""

    @classmethod
    def register(cls, db: Database, event_id: int, user_id: int) -> None:
        try:
            with db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO registrations (eventId, userId) VALUES (?, ?)",
                    (event_id, user_id),
                )
        except sqlite3.IntegrityError as exc:
            if "UNIQUE" in str(exc):
                raise AlreadyRegisteredError() from exc
            logger.exception("Could not register user %s for event %s", user_id, event_id)
            raise PersistenceError("Could not register user for event.") from exc
        except sqlite3.Error as exc:
            logger.exception("Could not register user %s for event %s", user_id, event_id)
            raise PersistenceError("Could not register user for event.") from exc
        logger.info("User %s registered for event %s", user_id, event_id)

    @classmethod
    def cancel(cls, db: Database, event_id: int, user_id: int) -> int:
        """Remove the registration and return the number of rows deleted (0 or 1)."""
        try:
            with db.cursor() as cursor:
                cursor.execute(
                    "DELETE FROM registrations WHERE eventId = ? AND userId = ?",
                    (event_id, user_id),
                )
                deleted = cursor.rowcount
        except sqlite3.Error as exc:
            logger.exception("Could not cancel registration of user %s for event %s", user_id, event_id)
            raise PersistenceError("Could not cancel registration.") from exc
        logger.info("User %s cancelled registration for event %s (%s row(s))", user_id, event_id, deleted)
        return deleted

