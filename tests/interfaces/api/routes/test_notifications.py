"""HTTP and websocket behaviour of the notification inbox."""

from __future__ import annotations

import pytest
from fastapi import WebSocketDisconnect

import app.interfaces.api.routes.notifications as notification_routes
from app.domain.exceptions import PreferenceValidationError
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import NotificationRepository


def _append(user_id: int, title: str = "Title"):
    with SessionLocal() as session:
        return NotificationRepository(session).append(
            recipient_id=user_id,
            notification_type="security_alert",
            title=title,
            message="Message",
            payload={},
        )


def test_list_unread_count_and_mark_read(client, make_user, auth_headers) -> None:
    user = make_user("jdoe")
    first = _append(user.id, "first")
    _append(user.id, "second")
    headers = auth_headers("jdoe")

    listing = client.get("/notifications/", headers=headers)
    assert [item["title"] for item in listing.json()] == ["second", "first"]
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 2}

    marked = client.put(f"/notifications/{first.id}/read", headers=headers)
    assert marked.status_code == 200
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 1}

    unread = client.get("/notifications/", params={"unread_only": True}, headers=headers)
    assert [item["title"] for item in unread.json()] == ["second"]


def test_limit_is_applied(client, make_user, auth_headers) -> None:
    user = make_user("jdoe")
    for index in range(4):
        _append(user.id, f"N{index}")

    response = client.get("/notifications/", params={"limit": 2}, headers=auth_headers("jdoe"))

    assert [item["title"] for item in response.json()] == ["N3", "N2"]


def test_mark_all_read_reports_affected_rows(client, make_user, auth_headers) -> None:
    user = make_user("jdoe")
    _append(user.id)
    _append(user.id)
    headers = auth_headers("jdoe")

    first = client.put("/notifications/read-all", headers=headers)
    second = client.put("/notifications/read-all", headers=headers)

    assert first.json()["updated"] == 2
    assert second.json()["updated"] == 0


def test_marking_someone_elses_notification_is_not_found(client, make_user, auth_headers) -> None:
    owner = make_user("owner")
    make_user("intruder")
    notification = _append(owner.id)

    response = client.put(
        f"/notifications/{notification.id}/read", headers=auth_headers("intruder")
    )

    assert response.status_code == 404
    with SessionLocal() as session:
        assert NotificationRepository(session).get(notification.id).is_read is False


def test_preferences_round_trip(client, make_user, auth_headers) -> None:
    make_user("jdoe")
    headers = auth_headers("jdoe")

    assert client.get("/notifications/preferences", headers=headers).json() == {
        "email_enabled": True,
        "in_app_enabled": True,
    }

    updated = client.put(
        "/notifications/preferences",
        json={"email_enabled": False, "in_app_enabled": True},
        headers=headers,
    )
    assert updated.status_code == 200
    assert client.get("/notifications/preferences", headers=headers).json() == {
        "email_enabled": False,
        "in_app_enabled": True,
    }


def test_preferences_accept_camel_case_names(client, make_user, auth_headers) -> None:
    make_user("jdoe")

    response = client.put(
        "/notifications/preferences",
        json={"emailNotifications": True, "inAppNotifications": False},
        headers=auth_headers("jdoe"),
    )

    assert response.json() == {"email_enabled": True, "in_app_enabled": False}


@pytest.mark.parametrize(
    "body",
    [
        {"email_enabled": "maybe", "in_app_enabled": True},
        {"email_enabled": True},
        {},
    ],
)
def test_malformed_preferences_are_rejected(client, make_user, auth_headers, body) -> None:
    make_user("jdoe")
    headers = auth_headers("jdoe")

    response = client.put("/notifications/preferences", json=body, headers=headers)

    assert response.status_code == 422
    assert client.get("/notifications/preferences", headers=headers).json() == {
        "email_enabled": True,
        "in_app_enabled": True,
    }


def test_routes_require_authentication(client) -> None:
    assert client.get("/notifications/").status_code == 401


def test_websocket_rejects_missing_or_invalid_token(client) -> None:
    with pytest.raises(WebSocketDisconnect) as missing:
        with client.websocket_connect("/notifications/ws"):
            pass
    assert missing.value.code == 1008

    with pytest.raises(WebSocketDisconnect) as invalid:
        with client.websocket_connect("/notifications/ws?token=not-a-jwt"):
            pass
    assert invalid.value.code == 1008


def test_websocket_session(client, make_user, login, services) -> None:
    user = make_user("jdoe")
    other = make_user("other")
    pending = _append(user.id, "pending")
    token = login("jdoe")

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [pending.id]
        assert services.registry.connection_count(user.id) == 1

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "authenticate", "user_id": other.id})
        assert websocket.receive_json()["type"] == "error"
        assert services.registry.connection_count(other.id) == 0

        websocket.send_json({"type": "authenticate", "user_id": user.id})
        assert websocket.receive_json() == {"type": "authenticated", "user_id": user.id}

        websocket.send_json({"type": "ack", "ids": [pending.id]})
        assert websocket.receive_json() == {"type": "acknowledged", "updated": 1}

    with SessionLocal() as session:
        assert NotificationRepository(session).count_unread(user.id) == 0


def test_admin_websocket_receives_ticket_events(client, make_user, login, auth_headers) -> None:
    admin = make_user("admin", is_admin=True)
    make_user("jdoe")
    token = login("admin")

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        assert websocket.receive_json() == {"type": "init", "data": []}

        response = client.post(
            "/tickets/",
            json={"subject": "Badge reader", "description": "Beeps"},
            headers=auth_headers("jdoe"),
        )
        assert response.status_code == 201

        board = websocket.receive_json()
        assert board["type"] == "ticket.board"
        assert board["data"]["change_type"] == "created"
        assert board["data"]["ticket"]["id"] == response.json()["id"]

        notification = websocket.receive_json()
        assert notification["type"] == "notification"
        assert notification["data"]["recipient_id"] == admin.id
        assert notification["data"]["type"] == "ticket_created"


def test_websocket_ignores_binary_and_malformed_frames(client, make_user, login) -> None:
    make_user("jdoe")
    token = login("jdoe")

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        assert websocket.receive_json()["type"] == "init"

        websocket.send_bytes(b"\x00\x01")
        websocket.send_text("{not json")
        websocket.send_json({"type": "ping"})

        assert websocket.receive_json() == {"type": "pong"}


def test_preference_validation_error_maps_to_422(client, make_user, auth_headers, monkeypatch) -> None:
    make_user("jdoe")

    def reject(*args, **kwargs):
        raise PreferenceValidationError("email_enabled must be a boolean")

    monkeypatch.setattr(notification_routes, "update_notification_preferences", reject)

    response = client.put(
        "/notifications/preferences",
        json={"email_enabled": True, "in_app_enabled": True},
        headers=auth_headers("jdoe"),
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "email_enabled must be a boolean"
