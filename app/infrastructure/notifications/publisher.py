"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

from typing import Any

from app.domain.entities import Notification
from app.utils import isoformat_or_none

from .registry import ChannelRegistry


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON representation of ``notification`` sent to clients."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "payload": notification.payload or {},
        "is_read": notification.is_read,
        "created_at": isoformat_or_none(notification.created_at),
    }


class NotificationPublisher:
    """Serialize notifications and push them to their recipient."""

    def __init__(self, registry: ChannelRegistry) -> None:
        self._registry = registry

    async def publish(self, notification: Notification) -> int:
        """Push ``notification`` to its recipient's live connections."""

        message = {"type": "notification", "data": serialize_notification(notification)}
        return await self._registry.push(notification.recipient_id, message)


__all__ = ["NotificationPublisher", "serialize_notification"]
