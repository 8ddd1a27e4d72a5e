"""Realtime notification helpers for the infrastructure layer."""

from .publisher import NotificationPublisher, serialize_notification
from .realtime import RealtimeEventPublisher
from .registry import ADMIN_GROUP, ChannelRegistry, PushEndpoint

__all__ = [
    "ADMIN_GROUP",
    "ChannelRegistry",
    "NotificationPublisher",
    "PushEndpoint",
    "RealtimeEventPublisher",
    "serialize_notification",
]
