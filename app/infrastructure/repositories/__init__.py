"""Repository implementations for infrastructure layer."""

from .biometric_log_repository import BiometricLogRepository
from .notification_repository import NotificationRepository
from .ticket_repository import TicketRepository
from .user_repository import UserRepository

__all__ = [
    "BiometricLogRepository",
    "NotificationRepository",
    "TicketRepository",
    "UserRepository",
]
