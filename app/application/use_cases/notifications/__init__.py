"""Notification ledger, preferences and delivery orchestration."""

from .events import (
    broadcast_ticket_board_change,
    build_notification_content,
    notify_biometric_failure,
    notify_ticket_created,
    notify_ticket_status_changed,
    notify_user_created,
)
from .ledger import (
    DEFAULT_LIST_LIMIT,
    count_unread_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .orchestrator import DeliveryReport, NotificationOrchestrator, SessionFactory
from .preferences import get_notification_preferences, update_notification_preferences
from .recipients import resolve_recipients
from .retention import purge_expired_notifications, run_retention_loop

__all__ = [
    "DEFAULT_LIST_LIMIT",
    "DeliveryReport",
    "NotificationOrchestrator",
    "SessionFactory",
    "broadcast_ticket_board_change",
    "build_notification_content",
    "count_unread_notifications",
    "get_notification_preferences",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_biometric_failure",
    "notify_ticket_created",
    "notify_ticket_status_changed",
    "notify_user_created",
    "purge_expired_notifications",
    "resolve_recipients",
    "run_retention_loop",
    "update_notification_preferences",
]
