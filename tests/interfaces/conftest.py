"""Fixtures to exercise the HTTP and websocket API."""

from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.database import SessionLocal
from app.interfaces.api.container import build_notification_services
from main import create_app


@pytest.fixture()
def services(registry, email_dispatcher):
    return build_notification_services(
        SessionLocal, registry=registry, email_dispatcher=email_dispatcher
    )


@pytest.fixture()
def client(services):
    app = create_app(notification_services=services)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def login(client, user_password) -> Callable[..., str]:
    """Return a bearer token for ``username``."""

    def _login(username: str, password: str | None = None) -> str:
        response = client.post(
            "/auth/token",
            data={"username": username, "password": password or user_password},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200, response.text
        return response.json()["access_token"]

    return _login


@pytest.fixture()
def auth_headers(login) -> Callable[..., dict[str, str]]:
    def _auth_headers(username: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {login(username)}"}

    return _auth_headers
