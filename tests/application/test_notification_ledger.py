"""Tests for the notification inbox use cases and retention purge."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notifications import (
    count_unread_notifications,
    get_notification_preferences,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    purge_expired_notifications,
    update_notification_preferences,
)
from app.domain.entities import NotificationPreference
from app.domain.exceptions import NotFoundError, PreferenceValidationError
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import NotificationRepository


def _append(db_session, user_id: int, title: str = "Title"):
    return NotificationRepository(db_session).append(
        recipient_id=user_id,
        notification_type="security_alert",
        title=title,
        message="Message",
        payload={"source": "test"},
    )


def test_mark_all_read_is_idempotent(make_user, db_session) -> None:
    user = make_user("reader")
    for index in range(3):
        _append(db_session, user.id, title=f"N{index}")

    assert mark_all_notifications_read(db_session, user.id) == 3
    assert list_notifications(db_session, user.id, unread_only=True) == []
    assert count_unread_notifications(db_session, user.id) == 0
    assert mark_all_notifications_read(db_session, user.id) == 0


def test_mark_read_of_foreign_notification_is_not_found(make_user, db_session) -> None:
    owner = make_user("owner")
    intruder = make_user("intruder")
    notification = _append(db_session, owner.id)

    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, notification.id, user_id=intruder.id)

    db_session.expire_all()
    assert NotificationRepository(db_session).get(notification.id).is_read is False


def test_mark_read_of_unknown_notification_is_not_found(make_user, db_session) -> None:
    user = make_user("reader")

    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, 12345, user_id=user.id)


def test_mark_read_flags_only_the_given_row(make_user, db_session) -> None:
    user = make_user("reader")
    first = _append(db_session, user.id, title="first")
    _append(db_session, user.id, title="second")

    mark_notification_read(db_session, first.id, user_id=user.id)

    unread = list_notifications(db_session, user.id, unread_only=True)
    assert [row.title for row in unread] == ["second"]


def test_list_is_newest_first_and_limited(make_user, db_session) -> None:
    user = make_user("reader")
    for index in range(5):
        _append(db_session, user.id, title=f"N{index}")

    rows = list_notifications(db_session, user.id, limit=3)

    assert [row.title for row in rows] == ["N4", "N3", "N2"]
    assert all(row.created_at.tzinfo is not None for row in rows)


def test_preferences_default_to_both_channels(make_user, db_session) -> None:
    user = make_user("fresh")

    assert get_notification_preferences(db_session, user.id) == NotificationPreference(
        email_enabled=True, in_app_enabled=True
    )


def test_update_preferences_overwrites_both_flags(make_user, db_session) -> None:
    user = make_user("picky")

    updated = update_notification_preferences(
        db_session, user.id, email_enabled=False, in_app_enabled=True
    )

    assert updated == NotificationPreference(email_enabled=False, in_app_enabled=True)
    db_session.expire_all()
    assert get_notification_preferences(db_session, user.id) == updated


def test_preferences_of_unknown_user_are_not_found(db_session) -> None:
    with pytest.raises(NotFoundError):
        get_notification_preferences(db_session, 404)
    with pytest.raises(NotFoundError):
        update_notification_preferences(db_session, 404, email_enabled=True, in_app_enabled=True)


def test_purge_removes_only_expired_rows(make_user, db_session) -> None:
    user = make_user("archivist")
    old = _append(db_session, user.id, title="old")
    recent = _append(db_session, user.id, title="recent")
    now = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
    db_session.query(NotificationModel).filter(NotificationModel.id == old.id).update(
        {NotificationModel.created_at: (now - timedelta(days=120)).replace(tzinfo=None)}
    )
    db_session.query(NotificationModel).filter(NotificationModel.id == recent.id).update(
        {NotificationModel.created_at: (now - timedelta(days=5)).replace(tzinfo=None)}
    )
    db_session.commit()

    removed = purge_expired_notifications(db_session, retention_days=90, now=now)

    assert removed == 1
    remaining = list_notifications(db_session, user.id)
    assert [row.title for row in remaining] == ["recent"]


def test_purge_disabled_with_zero_retention(make_user, db_session) -> None:
    user = make_user("hoarder")
    _append(db_session, user.id)

    assert purge_expired_notifications(db_session, retention_days=0) == 0
    assert count_unread_notifications(db_session, user.id) == 1


def test_update_preferences_rejects_non_boolean_flags(make_user, db_session) -> None:
    user = make_user("sloppy")

    with pytest.raises(PreferenceValidationError):
        update_notification_preferences(db_session, user.id, email_enabled="yes", in_app_enabled=True)

    assert get_notification_preferences(db_session, user.id).email_enabled is True
