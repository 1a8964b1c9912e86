"""Calendar event endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta

from fastapi.testclient import TestClient


def _event(title: str, when: datetime, event_type: str = "casual", **extra) -> dict:
    return {"event": {"title": title, "date": when.isoformat(), "type": event_type, **extra}}


def test_add_and_list_sorted_by_date(client: TestClient, auth_headers: dict) -> None:
    later = datetime(2030, 11, 22, 19, 0)
    sooner = datetime(2030, 11, 18, 9, 30)

    response = client.post("/events", json=_event("Birthday Party", later, "party"), headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["event"]["id"]
    client.post(
        "/events",
        json=_event("Office Meeting", sooner, "work", description="Quarterly review meeting"),
        headers=auth_headers,
    )

    events = client.get("/events", headers=auth_headers).json()["events"]

    assert [event["title"] for event in events] == ["Office Meeting", "Birthday Party"]
    assert events[0]["description"] == "Quarterly review meeting"
    assert events[1]["description"] is None


def test_unknown_event_type_rejected(client: TestClient, auth_headers: dict) -> None:
    response = client.post("/events", json=_event("Gala", datetime(2030, 1, 1), "gala"), headers=auth_headers)

    assert response.status_code == 422


def test_blank_title_rejected(client: TestClient, auth_headers: dict) -> None:
    response = client.post("/events", json=_event("   ", datetime(2030, 1, 1)), headers=auth_headers)

    assert response.status_code == 400


def test_upcoming_excludes_past_and_respects_limit(client: TestClient, auth_headers: dict) -> None:
    now = datetime.utcnow()
    client.post("/events", json=_event("Past", now - timedelta(days=3)), headers=auth_headers)
    for offset in range(1, 8):
        client.post("/events", json=_event(f"Future {offset}", now + timedelta(days=offset)), headers=auth_headers)

    events = client.get("/events/upcoming", headers=auth_headers).json()["events"]

    assert [event["title"] for event in events] == [f"Future {offset}" for offset in range(1, 6)]

    events = client.get("/events/upcoming", params={"limit": 2}, headers=auth_headers).json()["events"]
    assert len(events) == 2


def test_events_on_day(client: TestClient, auth_headers: dict) -> None:
    client.post("/events", json=_event("Diwali Celebration", datetime(2030, 11, 20, 18), "festival"),
                headers=auth_headers)
    client.post("/events", json=_event("Brunch", datetime(2030, 11, 21, 11)), headers=auth_headers)

    events = client.get("/events/on/2030-11-20", headers=auth_headers).json()["events"]

    assert [event["title"] for event in events] == ["Diwali Celebration"]


def test_delete_event_is_scoped_to_owner(client: TestClient, make_user) -> None:
    owner = make_user()
    other = make_user()
    event = client.post("/events", json=_event("Match", datetime(2030, 5, 1), "sport"), headers=owner).json()["event"]

    assert client.delete(f"/events/{event['id']}", headers=other).status_code == 404
    assert client.get("/events", headers=other).json()["events"] == []

    assert client.delete(f"/events/{event['id']}", headers=owner).json() == {"success": True}
    assert client.get("/events", headers=owner).json()["events"] == []
