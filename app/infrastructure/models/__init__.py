"""ORM models used by the application infrastructure."""

from .biometric_log import BiometricLogModel
from .notification import NotificationModel
from .ticket import TicketModel
from .user import UserModel

__all__ = [
    "BiometricLogModel",
    "NotificationModel",
    "TicketModel",
    "UserModel",
]
