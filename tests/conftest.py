"""Shared fixtures: a throwaway SQLite database and media directory per test run."""

from __future__ import annotations

import os
import tempfile
import uuid
from pathlib import Path

import pytest

_WORK_DIR = Path(tempfile.mkdtemp(prefix="wardrobe-tests-"))

# Config is read at import time, so these must be set before wardrobe is imported
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_WORK_DIR / 'test.db'}"
os.environ["MEDIA_ROOT"] = str(_WORK_DIR / "media")
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ.pop("OUTFIT_RANDOM_SEED", None)

from fastapi.testclient import TestClient  # noqa: E402

from wardrobe.main import app  # noqa: E402

# 1x1 transparent PNG
PNG_DATA_URL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Sign up and log in a fresh user; returns auth headers."""

    def _make_user(name: str = "Test User") -> dict[str, str]:
        email = f"{uuid.uuid4().hex[:12]}@example.com"
        password = "correct-horse"
        response = client.post("/auth/signup", json={"email": email, "password": password, "name": name})
        assert response.status_code == 200, response.text
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _make_user


@pytest.fixture
def auth_headers(make_user) -> dict[str, str]:
    return make_user()


@pytest.fixture
def png_data_url() -> str:
    return PNG_DATA_URL
