"""Domain entities exposed by the application."""

from .biometric_log import BiometricLog
from .notification import Notification, NotificationType
from .preference import NotificationPreference
from .recipient import AllAdmins, RecipientSelector, SingleUser
from .ticket import (
    DEFAULT_TICKET_PRIORITY,
    TICKET_PRIORITIES,
    TICKET_STATUSES,
    TICKET_STATUS_CLOSED,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_OPEN,
    TICKET_STATUS_RESOLVED,
    Ticket,
)
from .user import User

__all__ = [
    "AllAdmins",
    "BiometricLog",
    "DEFAULT_TICKET_PRIORITY",
    "Notification",
    "NotificationPreference",
    "NotificationType",
    "RecipientSelector",
    "SingleUser",
    "TICKET_PRIORITIES",
    "TICKET_STATUSES",
    "TICKET_STATUS_CLOSED",
    "TICKET_STATUS_IN_PROGRESS",
    "TICKET_STATUS_OPEN",
    "TICKET_STATUS_RESOLVED",
    "Ticket",
    "User",
]
