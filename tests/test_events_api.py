from __future__ import annotations

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from .conftest import EVENT_PAYLOAD, create_event, signup_and_login, user_id_from


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_list_events_is_public_and_initially_empty(client: TestClient) -> None:
    response = client.get("/events")
    assert response.status_code == 200
    assert response.json() == []


def test_create_event_scenario(client: TestClient) -> None:
    token = signup_and_login(client, "a@x.com", "pw")

    response = client.post("/events", json=EVENT_PAYLOAD, headers={"Authorization": token})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Event created"
    assert body["event"]["userId"] == user_id_from(token)
    assert body["event"]["id"] > 0


def test_created_event_round_trips(client: TestClient) -> None:
    token = signup_and_login(client)
    payload = {
        "name": "X",
        "description": "Y",
        "location": "Z",
        "dateTime": "2025-06-01T18:30:00Z",
        "userId": 9999,
        "UserID": 9999,
    }

    created = client.post("/events", json=payload, headers={"Authorization": token}).json()["event"]
    fetched = client.get(f"/events/{created['id']}").json()

    assert fetched["id"] == created["id"]
    assert fetched["name"] == "X"
    assert fetched["description"] == "Y"
    assert fetched["location"] == "Z"
    assert _parse(fetched["dateTime"]) == datetime(2025, 6, 1, 18, 30, tzinfo=timezone.utc)
    assert fetched["userId"] == user_id_from(token)
    assert client.get("/events").json() == [fetched]


def test_bearer_prefix_is_accepted(client: TestClient) -> None:
    token = signup_and_login(client)

    response = client.post("/events", json=EVENT_PAYLOAD, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 201


def test_create_event_requires_token(client: TestClient) -> None:
    missing = client.post("/events", json=EVENT_PAYLOAD)
    invalid = client.post("/events", json=EVENT_PAYLOAD, headers={"Authorization": "not-a-token"})

    assert missing.status_code == 401
    assert invalid.status_code == 401
    assert missing.json() == invalid.json() == {"message": "Not authorized."}
    assert client.get("/events").json() == []


def test_create_event_validates_body(client: TestClient) -> None:
    token = signup_and_login(client)
    incomplete = {key: value for key, value in EVENT_PAYLOAD.items() if key != "location"}

    response = client.post("/events", json=incomplete, headers={"Authorization": token})
    assert response.status_code == 400
    assert response.json() == {"message": "Could not parse request data."}

    response = client.post("/events", json={**EVENT_PAYLOAD, "dateTime": "soon"}, headers={"Authorization": token})
    assert response.status_code == 400


def test_get_event_with_bad_id(client: TestClient) -> None:
    response = client.get("/events/abc")
    assert response.status_code == 400
    assert response.json() == {"message": "Could not parse event id."}


def test_get_missing_event_is_a_server_error(client: TestClient) -> None:
    response = client.get("/events/999999")
    assert response.status_code == 500
    assert response.json() == {"message": "Could not fetch event."}


def test_owner_can_update_event(client: TestClient) -> None:
    token = signup_and_login(client)
    event = create_event(client, token)
    changes = {"name": "new", "description": "nd", "location": "nl", "dateTime": "2026-02-03T04:05:06Z"}

    response = client.put(f"/events/{event['id']}", json=changes, headers={"Authorization": token})

    assert response.status_code == 200
    assert response.json() == {"message": "Event updated successfully!"}
    fetched = client.get(f"/events/{event['id']}").json()
    assert fetched["name"] == "new"
    assert fetched["location"] == "nl"
    assert _parse(fetched["dateTime"]) == datetime(2026, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
    assert fetched["userId"] == event["userId"]


def test_other_account_cannot_update_event(client: TestClient) -> None:
    owner = signup_and_login(client, "owner@x.com", "pw")
    intruder = signup_and_login(client, "intruder@x.com", "pw")
    event = create_event(client, owner)
    changes = {**EVENT_PAYLOAD, "name": "hijacked"}

    response = client.put(f"/events/{event['id']}", json=changes, headers={"Authorization": intruder})

    assert response.status_code == 401
    assert client.get(f"/events/{event['id']}").json() == event


def test_update_missing_event(client: TestClient) -> None:
    token = signup_and_login(client)

    response = client.put("/events/424242", json=EVENT_PAYLOAD, headers={"Authorization": token})
    assert response.status_code == 400
    assert response.json() == {"message": "Could not fetch the event."}


def test_delete_missing_event(client: TestClient) -> None:
    token = signup_and_login(client)

    response = client.delete("/events/424242", headers={"Authorization": token})
    assert response.status_code == 500
    assert response.json() == {"message": "Could not fetch the event."}


def test_update_requires_token(client: TestClient) -> None:
    token = signup_and_login(client)
    event = create_event(client, token)

    response = client.put(f"/events/{event['id']}", json=EVENT_PAYLOAD)
    assert response.status_code == 401


def test_owner_can_delete_event(client: TestClient) -> None:
    token = signup_and_login(client)
    event = create_event(client, token)

    response = client.delete(f"/events/{event['id']}", headers={"Authorization": token})

    assert response.status_code == 200
    assert response.json() == {"message": "Event deleted successfully!"}
    assert client.get("/events").json() == []


def test_other_account_cannot_delete_event(client: TestClient) -> None:
    owner = signup_and_login(client, "owner@x.com", "pw")
    intruder = signup_and_login(client, "intruder@x.com", "pw")
    event = create_event(client, owner)

    response = client.delete(f"/events/{event['id']}", headers={"Authorization": intruder})

    assert response.status_code == 401
    assert client.get(f"/events/{event['id']}").json() == event


def test_delete_with_bad_id(client: TestClient) -> None:
    token = signup_and_login(client)

    response = client.delete("/events/abc", headers={"Authorization": token})
    assert response.status_code == 400
