"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .preference import NotificationPreference


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    name: str
    department: str
    email: str | None
    password: str
    is_admin: bool
    is_active: bool
    email_notifications: bool
    in_app_notifications: bool
    created_at: datetime | None

    @property
    def preferences(self) -> NotificationPreference:
        """Return the notification channels the user opted into."""

        return NotificationPreference(
            email_enabled=self.email_notifications,
            in_app_enabled=self.in_app_notifications,
        )


__all__ = ["User"]
