"""
Business logic for events.

Every method takes the ``Database`` handle explicitly and performs one
transaction.  Rows are mapped to ``EventRead`` models; a missing row is
reported as ``NotFoundError`` and any SQLite failure as
``PersistenceError``.  Ownership checks are the caller's job and happen
after a successful ``get_event``.
"""

import logging
import sqlite3
from typing import List

from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import NotFoundError, NotOwnerError, PersistenceError
from event_signup_api.app.schemas.event import EventCreate, EventRead, EventUpdate


logger = logging.getLogger(__name__)

EVENT_COLUMNS = "id, name, description, location, dateTime, user_id"


def _row_to_event(row: sqlite3.Row) -> EventRead:
    return EventRead(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        location=row["location"],
        date_time=row["dateTime"],
        user_id=row["user_id"],
    )


class EventService:
    """Service for managing events."""

    @classmethod
    def create_event(cls, db: Database, data: EventCreate, user_id: int) -> EventRead:
        """Insert an event owned by ``user_id`` and return it with its new id."""
        try:
            with db.cursor() as cursor:
                cursor.execute(
                    """
                    INSERT INTO events (name, description, location, dateTime, user_id)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (data.name, data.description, data.location, data.date_time.isoformat(), user_id),
                )
                event_id = cursor.lastrowid
        except sqlite3.Error as exc:
            logger.exception("Could not create event for user %s", user_id)
            raise PersistenceError("Could not create event.") from exc
        logger.info("User %s created event %s", user_id, event_id)
        return EventRead(id=event_id, user_id=user_id, **data.model_dump())

    @classmethod
    def list_events(cls, db: Database) -> List[EventRead]:
        """Return all events ordered by id."""
        try:
            with db.cursor() as cursor:
                rows = cursor.execute(f"SELECT {EVENT_COLUMNS} FROM events ORDER BY id").fetchall()
        except sqlite3.Error as exc:
            logger.exception("Could not list events")
            raise PersistenceError("Could not fetch events.") from exc
        return [_row_to_event(row) for row in rows]

    @classmethod
    def get_event(cls, db: Database, event_id: int) -> EventRead:
        """Retrieve a single event by id, raising ``NotFoundError`` if absent."""
        try:
            with db.cursor() as cursor:
                row = cursor.execute(
                    f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ?",
                    (event_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Could not fetch event %s", event_id)
            raise PersistenceError("Could not fetch the event.") from exc
        if row is None:
            raise NotFoundError(f"Event {event_id} not found")
        return _row_to_event(row)

    @classmethod
    def update_event(cls, db: Database, event_id: int, data: EventUpdate) -> None:
        """Replace name, description, location and date/time of an event."""
        try:
            with db.cursor() as cursor:
                cursor.execute(
                    """
                    UPDATE events
                    SET name = ?, description = ?, location = ?, dateTime = ?
                    WHERE id = ?
                    """,
                    (data.name, data.description, data.location, data.date_time.isoformat(), event_id),
                )
        except sqlite3.Error as exc:
            logger.exception("Could not update event %s", event_id)
            raise PersistenceError("Could not update event.") from exc
        logger.info("Updated event %s", event_id)

    @classmethod
    def delete_event(cls, db: Database, event_id: int) -> None:
        """Delete an event together with its registrations."""
        try:
            with db.cursor() as cursor:
                cursor.execute("DELETE FROM registrations WHERE eventId = ?", (event_id,))
                cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
        except sqlite3.Error as exc:
            logger.exception("Could not delete event %s", event_id)
            raise PersistenceError("Could not delete the event.") from exc
        logger.info("Deleted event %s", event_id)

    @classmethod
    def get_owned_event(cls, db: Database, event_id: int, user_id: int) -> EventRead:
        """Fetch an event and make sure ``user_id`` owns it.

        The fetch error (``NotFoundError``/``PersistenceError``) is
        raised before ownership is looked at; a different owner raises
        ``NotOwnerError``.
        """
        event = cls.get_event(db, event_id)
        if event.user_id != user_id:
            logger.warning("User %s is not the owner of event %s", user_id, event_id)
            raise NotOwnerError()
        return event
