from .auth import Token
from .biometric import BiometricLogCreate, BiometricLogRead
from .notification import (
    MarkAllReadResponse,
    MessageResponse,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountRead,
)
from .ticket import TicketCreate, TicketRead, TicketStatusUpdate
from .user import UserCreate, UserRead

__all__ = [
    "BiometricLogCreate",
    "BiometricLogRead",
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "TicketCreate",
    "TicketRead",
    "TicketStatusUpdate",
    "Token",
    "UnreadCountRead",
    "UserCreate",
    "UserRead",
]
