"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def create_user(
    session: Session,
    *,
    username: str,
    password: str,
    name: str,
    department: str,
    email: str | None = None,
    is_admin: bool = False,
) -> User:
    """Create a new user ensuring unique usernames."""

    username = username.strip()
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValueError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    repository = UserRepository(session)
    if repository.get_by_username(username):
        raise ValueError("Username already exists")

    user = User(
        id=None,
        username=username,
        name=name,
        department=department,
        email=email,
        password=get_password_hash(password),
        is_admin=is_admin,
        is_active=True,
        email_notifications=True,
        in_app_notifications=True,
        created_at=None,
    )
    return repository.create(user)
