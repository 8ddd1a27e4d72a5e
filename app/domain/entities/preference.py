"""Domain entity holding a user's notification channel choices."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationPreference:
    """Channels through which a user accepts notifications."""

    email_enabled: bool = True
    in_app_enabled: bool = True


__all__ = ["NotificationPreference"]
