"""Use cases operating on a user's notification inbox."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository

DEFAULT_LIST_LIMIT = 50


def list_notifications(
    session: Session,
    user_id: int,
    *,
    limit: int = DEFAULT_LIST_LIMIT,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return the newest notifications of ``user_id``, newest first."""

    return NotificationRepository(session).list_for_user(
        user_id, limit=limit, unread_only=unread_only
    )


def count_unread_notifications(session: Session, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(session: Session, notification_id: int, *, user_id: int) -> int:
    """Flag ``notification_id`` as read for its owner.

    Raises :class:`NotFoundError` when the notification does not exist or
    belongs to another user.
    """

    affected = NotificationRepository(session).mark_read(notification_id, user_id=user_id)
    if affected == 0:
        raise NotFoundError("Notification not found")
    return affected


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    """Flag every unread notification of ``user_id`` and return how many changed."""

    return NotificationRepository(session).mark_all_read(user_id)


__all__ = [
    "DEFAULT_LIST_LIMIT",
    "count_unread_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
