from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Iterator

import pytest

from event_signup_api.app.core.db import ConnectionPool, Database, open_database


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    db = open_database(str(tmp_path / "api.sqlite3"), max_open=2, max_idle=1)
    yield db
    db.close()


def test_initialize_creates_tables_and_is_idempotent(database: Database) -> None:
    database.initialize()

    with database.cursor() as cursor:
        names = {
            row["name"]
            for row in cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        }
    assert {"users", "events", "registrations"} <= names


def test_cursor_commits_on_success(database: Database) -> None:
    with database.cursor() as cursor:
        cursor.execute("INSERT INTO users (email, password) VALUES (?, ?)", ("a@x.com", "hash"))
        user_id = cursor.lastrowid

    with database.cursor() as cursor:
        row = cursor.execute("SELECT email FROM users WHERE id = ?", (user_id,)).fetchone()
    assert row["email"] == "a@x.com"


def test_cursor_rolls_back_on_error(database: Database) -> None:
    with pytest.raises(RuntimeError):
        with database.cursor() as cursor:
            cursor.execute("INSERT INTO users (email, password) VALUES (?, ?)", ("a@x.com", "hash"))
            raise RuntimeError("boom")

    with database.cursor() as cursor:
        count = cursor.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"]
    assert count == 0


def test_foreign_keys_are_enforced(database: Database) -> None:
    with pytest.raises(sqlite3.IntegrityError):
        with database.cursor() as cursor:
            cursor.execute("INSERT INTO registrations (eventId, userId) VALUES (?, ?)", (99, 99))


def test_pool_keeps_at_most_max_idle_connections(tmp_path: Path) -> None:
    pool = ConnectionPool(str(tmp_path / "pool.sqlite3"), max_open=3, max_idle=2)
    connections = [pool.acquire() for _ in range(3)]
    for conn in connections:
        pool.release(conn)

    assert pool.idle_count == 2
    pool.close()
    assert pool.idle_count == 0


def test_pool_reuses_idle_connection(tmp_path: Path) -> None:
    pool = ConnectionPool(str(tmp_path / "pool.sqlite3"), max_open=1, max_idle=1)
    first = pool.acquire()
    pool.release(first)

    assert pool.acquire() is first
    pool.close()


def test_acquire_blocks_until_a_connection_is_released(tmp_path: Path) -> None:
    pool = ConnectionPool(str(tmp_path / "pool.sqlite3"), max_open=1, max_idle=1)
    held = pool.acquire()
    acquired = threading.Event()

    def worker() -> None:
        conn = pool.acquire()
        acquired.set()
        pool.release(conn)

    thread = threading.Thread(target=worker)
    thread.start()
    try:
        assert not acquired.wait(0.2)
        pool.release(held)
        assert acquired.wait(5)
    finally:
        thread.join(5)
    pool.close()


def test_closed_pool_refuses_connections(tmp_path: Path) -> None:
    pool = ConnectionPool(str(tmp_path / "pool.sqlite3"), max_open=1, max_idle=1)
    pool.close()

    with pytest.raises(sqlite3.ProgrammingError):
        pool.acquire()
    # The slot was returned, so a failed acquire does not leak capacity.
    with pytest.raises(sqlite3.ProgrammingError):
        pool.acquire()


@pytest.mark.parametrize("max_open, max_idle", [(0, 0), (2, 3), (2, -1)])
def test_pool_rejects_invalid_bounds(tmp_path: Path, max_open: int, max_idle: int) -> None:
    with pytest.raises(ValueError):
        ConnectionPool(str(tmp_path / "pool.sqlite3"), max_open=max_open, max_idle=max_idle)
