"""Use cases for reading and updating notification preferences."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference
from app.domain.exceptions import NotFoundError, PreferenceValidationError
from app.infrastructure.repositories import UserRepository


def get_notification_preferences(session: Session, user_id: int) -> NotificationPreference:
    """Return the channels enabled for ``user_id``."""

    preference = UserRepository(session).get_preferences(user_id)
    if preference is None:
        raise NotFoundError(f"User {user_id} not found")
    return preference


def update_notification_preferences(
    session: Session,
    user_id: int,
    *,
    email_enabled: bool,
    in_app_enabled: bool,
) -> NotificationPreference:
    """Overwrite both notification flags of ``user_id``."""

    for name, value in (("email_enabled", email_enabled), ("in_app_enabled", in_app_enabled)):
        if not isinstance(value, bool):
            raise PreferenceValidationError(f"{name} must be a boolean")
    preference = NotificationPreference(
        email_enabled=email_enabled,
        in_app_enabled=in_app_enabled,
    )
    if not UserRepository(session).set_preferences(user_id, preference):
        raise NotFoundError(f"User {user_id} not found")
    return preference


__all__ = ["get_notification_preferences", "update_notification_preferences"]
