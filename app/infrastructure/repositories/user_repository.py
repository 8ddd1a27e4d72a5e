"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference, User
from app.infrastructure.models import UserModel
from app.utils import ensure_utc


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def list_admins(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_admin.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_preferences(self, user_id: int) -> NotificationPreference | None:
        row = (
            self.session.query(
                UserModel.email_notifications, UserModel.in_app_notifications
            )
            .filter(UserModel.id == user_id)
            .first()
        )
        if row is None:
            return None
        email_enabled, in_app_enabled = row
        defaults = NotificationPreference()
        return NotificationPreference(
            email_enabled=defaults.email_enabled if email_enabled is None else bool(email_enabled),
            in_app_enabled=defaults.in_app_enabled if in_app_enabled is None else bool(in_app_enabled),
        )

    def set_preferences(self, user_id: int, preference: NotificationPreference) -> bool:
        """Overwrite the notification flags of ``user_id``.

        Returns ``False`` when the user does not exist.
        """

        affected = (
            self.session.query(UserModel)
            .filter(UserModel.id == user_id)
            .update(
                {
                    UserModel.email_notifications: bool(preference.email_enabled),
                    UserModel.in_app_notifications: bool(preference.in_app_enabled),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return affected > 0

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            name=model.name,
            department=model.department,
            email=model.email,
            password=model.password,
            is_admin=bool(model.is_admin),
            is_active=bool(model.is_active),
            email_notifications=bool(model.email_notifications),
            in_app_notifications=bool(model.in_app_notifications),
            created_at=ensure_utc(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = user.username
        model.name = user.name
        model.department = user.department
        model.email = user.email
        model.password = user.password
        model.is_admin = user.is_admin
        model.is_active = user.is_active
        model.email_notifications = user.email_notifications
        model.in_app_notifications = user.in_app_notifications


__all__ = ["UserRepository"]
