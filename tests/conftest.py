"""
Shared pytest fixtures.

Every test gets its own SQLite file under ``tmp_path``; the ``client``
fixture wraps a freshly created application in FastAPI's
``TestClient`` so the startup hook (migrations) runs.
"""

from __future__ import annotations

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from bug_tracker_api.app.core.config import settings
from bug_tracker_api.app.core.db import init_db
from bug_tracker_api.app.main import create_app

API = "/api/v1"
PASSWORD = "secret-pass"


@pytest.fixture
def database(tmp_path, monkeypatch) -> str:
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "bug_tracker_test.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def client(database):
    with TestClient(create_app()) as test_client:
        yield test_client


def register_and_login(client: TestClient, login: str) -> Dict[str, str]:
    response = client.post(f"{API}/users", json={"login": login, "password": PASSWORD})
    assert response.status_code == 201, response.text
    response = client.post(f"{API}/users/login", json={"login": login, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    # The first account registered becomes the administrator.
    return register_and_login(client, "admin")


@pytest.fixture
def user_headers(client, admin_headers) -> Dict[str, str]:
    return register_and_login(client, "user")
