"""
SQLite database integration.

The ``Database`` object is created once by the application factory,
stored on ``app.state`` and handed to the services through a FastAPI
dependency; nothing in the package keeps a module level connection.

Connections come from a small bounded ``ConnectionPool``: at most
``max_open`` connections exist at any time and at most ``max_idle`` are
kept around once released.  Callers block while the pool is exhausted.
``Database.cursor`` wraps one unit of work in a transaction, so an
``INSERT`` and the read of its ``lastrowid`` either both happen or
neither does.
"""

import logging
import sqlite3
import threading
from collections import deque
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    location TEXT NOT NULL,
    dateTime DATETIME NOT NULL,
    user_id INTEGER,
    FOREIGN KEY(user_id) REFERENCES users(id)
);

CREATE TABLE IF NOT EXISTS registrations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    eventId INTEGER,
    userId INTEGER,
    FOREIGN KEY(userId) REFERENCES users(id),
    FOREIGN KEY(eventId) REFERENCES events(id)
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_registrations_event_user
    ON registrations(eventId, userId);
CREATE INDEX IF NOT EXISTS idx_events_user_id ON events(user_id);
"""


class ConnectionPool:
    """Bounded pool of SQLite connections shared by all request threads."""

    def __init__(self, path: str, max_open: int = 10, max_idle: int = 5):
        if max_open < 1:
            raise ValueError("max_open must be at least 1")
        if max_idle < 0 or max_idle > max_open:
            raise ValueError("max_idle must be between 0 and max_open")
        self.path = path
        self.max_open = max_open
        self.max_idle = max_idle
        self._slots = threading.BoundedSemaphore(max_open)
        self._idle: deque[sqlite3.Connection] = deque()
        self._lock = threading.Lock()
        self._closed = False

    def _connect(self) -> sqlite3.Connection:
        # Connections migrate between worker threads, the pool makes sure
        # only one thread uses a given connection at a time.
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def acquire(self) -> sqlite3.Connection:
        """Return a connection, blocking while ``max_open`` are checked out."""
        self._slots.acquire()
        try:
            with self._lock:
                if self._closed:
                    raise sqlite3.ProgrammingError("Connection pool is closed")
                if self._idle:
                    return self._idle.pop()
            return self._connect()
        except BaseException:
            self._slots.release()
            raise

    def release(self, conn: sqlite3.Connection) -> None:
        """Give a connection back; it is closed if the idle list is full."""
        try:
            with self._lock:
                if not self._closed and len(self._idle) < self.max_idle:
                    self._idle.append(conn)
                    conn = None
            if conn is not None:
                conn.close()
        finally:
            self._slots.release()

    @property
    def idle_count(self) -> int:
        with self._lock:
            return len(self._idle)

    def close(self) -> None:
        """Close idle connections and refuse further acquisitions."""
        with self._lock:
            self._closed = True
            idle, self._idle = list(self._idle), deque()
        for conn in idle:
            conn.close()


class Database:
    """Persistence handle owned by the application."""

    def __init__(self, path: str, max_open: int = 10, max_idle: int = 5):
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.pool = ConnectionPool(path, max_open=max_open, max_idle=max_idle)

    def initialize(self) -> None:
        """Create the tables if they do not exist yet."""
        conn = self.pool.acquire()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            self.pool.release(conn)
        logger.info("Database schema ready at %s", self.path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.pool.acquire()
        try:
            yield conn
        finally:
            self.pool.release(conn)

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a transaction.

        The transaction is committed when the block exits normally and
        rolled back when it raises.
        """
        with self.connection() as conn:
            cursor = conn.cursor()
            try:
                yield cursor
                conn.commit()
            except BaseException:
                conn.rollback()
                raise
            finally:
                cursor.close()

    def close(self) -> None:
        self.pool.close()


def open_database(path: str, max_open: int = 10, max_idle: int = 5) -> Database:
    """Build a ``Database`` and create its schema."""
    db = Database(path, max_open=max_open, max_idle=max_idle)
    db.initialize()
    return db
