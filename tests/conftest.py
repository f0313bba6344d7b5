from __future__ import annotations

from pathlib import Path
from typing import Iterator

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from event_signup_api.app.core.config import Settings
from event_signup_api.app.main import create_app


SECRET_KEY = "tests-secret-key-with-at-least-32-bytes"
EVENT_PAYLOAD = {
    "name": "n",
    "description": "d",
    "location": "l",
    "dateTime": "2025-01-01T00:00:00Z",
}


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        secret_key=SECRET_KEY,
        bcrypt_rounds=4,
        database_url=str(tmp_path / "api.sqlite3"),
        log_level="DEBUG",
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def signup_and_login(client: TestClient, email: str = "a@x.com", password: str = "pw") -> str:
    response = client.post("/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def user_id_from(token: str) -> int:
    return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])["userId"]


def create_event(client: TestClient, token: str, **overrides) -> dict:
    payload = {**EVENT_PAYLOAD, **overrides}
    response = client.post("/events", json=payload, headers={"Authorization": token})
    assert response.status_code == 201, response.text
    return response.json()["event"]


def is_registered(app: FastAPI, event_id: int, user_id: int) -> bool:
    with app.state.db.cursor() as cursor:
        row = cursor.execute(
            "SELECT 1 FROM registrations WHERE eventId = ? AND userId = ?",
            (event_id, user_id),
        ).fetchone()
    return row is not None
