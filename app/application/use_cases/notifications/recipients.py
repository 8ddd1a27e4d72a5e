"""Resolution of recipient selectors into concrete users."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import AllAdmins, RecipientSelector, SingleUser, User
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import UserRepository


def resolve_recipients(session: Session, selector: RecipientSelector) -> list[User]:
    """Return the active users addressed by ``selector``.

    Raises :class:`NotFoundError` when a ``SingleUser`` selector names an
    unknown user. Inactive accounts never receive notifications.
    """

    repository = UserRepository(session)
    if isinstance(selector, AllAdmins):
        return [admin for admin in repository.list_admins() if admin.is_active]
    if isinstance(selector, SingleUser):
        user = repository.get(selector.user_id)
        if user is None:
            raise NotFoundError(f"User {selector.user_id} not found")
        return [user] if user.is_active else []
    raise TypeError(f"Unsupported recipient selector: {selector!r}")


__all__ = ["resolve_recipients"]
