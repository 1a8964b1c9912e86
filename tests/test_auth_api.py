"""Signup, login and bearer-token checks."""

from __future__ import annotations

import uuid
from datetime import timedelta

from fastapi.testclient import TestClient

from wardrobe.auth import create_access_token


def _email() -> str:
    return f"{uuid.uuid4().hex[:12]}@example.com"


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "timestamp" in response.json()


def test_signup_then_login(client: TestClient) -> None:
    email = _email()

    response = client.post("/auth/signup", json={"email": email, "password": "secret1", "name": "Asha"})
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Asha"

    response = client.post("/auth/login", json={"email": email.upper(), "password": "secret1"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == email
    assert "access_token" in response.cookies


def test_duplicate_signup_rejected(client: TestClient) -> None:
    email = _email()
    payload = {"email": email, "password": "secret1", "name": "Asha"}

    assert client.post("/auth/signup", json=payload).status_code == 200
    response = client.post("/auth/signup", json=payload)

    assert response.status_code == 400


def test_signup_requires_all_fields(client: TestClient) -> None:
    response = client.post("/auth/signup", json={"email": _email(), "password": "secret1"})

    assert response.status_code == 422


def test_wrong_password_rejected(client: TestClient) -> None:
    email = _email()
    client.post("/auth/signup", json={"email": email, "password": "secret1", "name": "Asha"})

    response = client.post("/auth/login", json={"email": email, "password": "nope-nope"})

    assert response.status_code == 401


def test_session_reports_user(client: TestClient, make_user) -> None:
    headers = make_user(name="Ravi")

    response = client.get("/auth/session", headers=headers)

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Ravi"


def test_protected_routes_require_token(client: TestClient) -> None:
    assert client.get("/wardrobe").status_code == 401
    assert client.get("/events").status_code == 401
    assert client.post("/outfits/generate", json={"occasion": "office"}).status_code == 401
    assert client.get("/wardrobe", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_expired_token_rejected(client: TestClient, make_user) -> None:
    make_user()
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-10))

    response = client.get("/wardrobe", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_cookie_session_and_logout(client: TestClient) -> None:
    email = _email()
    client.post("/auth/signup", json={"email": email, "password": "secret1", "name": "Asha"})
    client.post("/auth/login", json={"email": email, "password": "secret1"})

    assert client.get("/wardrobe").status_code == 200

    client.post("/auth/logout")
    client.cookies.clear()
    assert client.get("/wardrobe").status_code == 401
