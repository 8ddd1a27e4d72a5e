"""Notifications emitted by helpdesk activity."""

from __future__ import annotations

from typing import Any, Mapping

from app.domain.entities import (
    AllAdmins,
    NotificationType,
    SingleUser,
    Ticket,
    User,
)
from app.infrastructure.notifications import ADMIN_GROUP, RealtimeEventPublisher
from app.utils import isoformat_or_none

from .orchestrator import DeliveryReport, NotificationOrchestrator

_TICKET_BOARD_EVENT = "ticket.board"

_DEFAULT_CONTENT = ("Notification", "You have a new notification")


def build_notification_content(
    notification_type: NotificationType | str, data: Mapping[str, Any] | None = None
) -> tuple[str, str]:
    """Return the default title and message for ``notification_type``."""

    data = data or {}
    try:
        kind = NotificationType(notification_type)
    except ValueError:
        return _DEFAULT_CONTENT

    if kind is NotificationType.TICKET_CREATED:
        return "New Support Ticket", f'A new support ticket has been created: "{data.get("subject")}"'
    if kind is NotificationType.TICKET_UPDATED:
        return (
            "Ticket Updated",
            f'Your ticket "{data.get("subject")}" has been updated to status: {data.get("status")}',
        )
    if kind is NotificationType.TICKET_ASSIGNED:
        return "Ticket Assigned", f'You have been assigned to ticket: "{data.get("subject")}"'
    if kind is NotificationType.BIOMETRIC_FAILURE:
        return (
            "Biometric Access Failed",
            f"Failed biometric access attempt detected for user: {data.get('username')}",
        )
    if kind is NotificationType.SECURITY_ALERT:
        return "Security Alert", f"Security alert: {data.get('message')}"
    if kind is NotificationType.SYSTEM_MAINTENANCE:
        return "System Maintenance", f"Scheduled maintenance: {data.get('message')}"
    if kind is NotificationType.PASSWORD_RESET:
        return "Password Reset", "Your password has been successfully reset"
    if kind is NotificationType.USER_CREATED:
        return "New User Created", f"New user account created: {data.get('username')}"
    return _DEFAULT_CONTENT


async def notify_ticket_created(
    orchestrator: NotificationOrchestrator, *, ticket: Ticket
) -> DeliveryReport:
    """Tell every administrator that a new ticket was filed."""

    payload = {
        "ticket_id": ticket.id,
        "subject": ticket.subject,
        "priority": ticket.priority,
        "user_id": ticket.user_id,
    }
    title, message = build_notification_content(NotificationType.TICKET_CREATED, payload)
    return await orchestrator.notify(
        AllAdmins(), NotificationType.TICKET_CREATED.value, title, message, payload
    )


async def notify_ticket_status_changed(
    orchestrator: NotificationOrchestrator, *, ticket: Ticket
) -> DeliveryReport:
    """Tell the ticket owner that an administrator changed its status."""

    payload = {"ticket_id": ticket.id, "subject": ticket.subject, "status": ticket.status}
    title, message = build_notification_content(NotificationType.TICKET_UPDATED, payload)
    return await orchestrator.notify(
        SingleUser(ticket.user_id), NotificationType.TICKET_UPDATED.value, title, message, payload
    )


async def notify_biometric_failure(
    orchestrator: NotificationOrchestrator, *, user: User, ip_address: str | None
) -> DeliveryReport:
    """Alert administrators about a failed biometric access attempt."""

    payload = {"user_id": user.id, "username": user.username, "ip": ip_address}
    title, message = build_notification_content(NotificationType.BIOMETRIC_FAILURE, payload)
    return await orchestrator.notify(
        AllAdmins(), NotificationType.BIOMETRIC_FAILURE.value, title, message, payload
    )


async def notify_user_created(
    orchestrator: NotificationOrchestrator, *, user: User, created_by: int | None
) -> DeliveryReport:
    """Tell administrators that a new account exists."""

    payload = {"user_id": user.id, "username": user.username, "created_by": created_by}
    title, message = build_notification_content(NotificationType.USER_CREATED, payload)
    return await orchestrator.notify(
        AllAdmins(), NotificationType.USER_CREATED.value, title, message, payload
    )


async def broadcast_ticket_board_change(
    publisher: RealtimeEventPublisher, *, ticket: Ticket, change_type: str
) -> int:
    """Refresh the ticket board of connected administrators."""

    payload = {
        "change_type": change_type,
        "ticket": {
            "id": ticket.id,
            "user_id": ticket.user_id,
            "subject": ticket.subject,
            "status": ticket.status,
            "priority": ticket.priority,
            "created_at": isoformat_or_none(ticket.created_at),
            "updated_at": isoformat_or_none(ticket.updated_at),
        },
    }
    return await publisher.dispatch_group(
        ADMIN_GROUP, event_type=_TICKET_BOARD_EVENT, payload=payload
    )


__all__ = [
    "broadcast_ticket_board_change",
    "build_notification_content",
    "notify_biometric_failure",
    "notify_ticket_created",
    "notify_ticket_status_changed",
    "notify_user_created",
]
