"""Shared fixtures: a throwaway SQLite database and recording delivery doubles."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "vaultdesk_api_tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.email import EmailDispatcher  # noqa: E402
from app.infrastructure.models import UserModel  # noqa: E402
from app.infrastructure.notifications import ChannelRegistry  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import get_password_hash  # noqa: E402

DEFAULT_PASSWORD = "StrongPass123"
_password_hashes: dict[str, str] = {}


class RecordingEmailDispatcher(EmailDispatcher):
    """Email dispatcher that records every attempt instead of calling SendGrid."""

    def __init__(self) -> None:
        super().__init__(sender=self._record)
        self.sent: list[tuple[str, str, str]] = []
        self.failing_addresses: set[str] = set()
        self.on_send: Callable[[str], None] | None = None

    def _record(self, subject: str, html_content: str, recipient: str) -> bool:
        if self.on_send is not None:
            self.on_send(recipient)
        self.sent.append((recipient, subject, html_content))
        return recipient not in self.failing_addresses

    @property
    def addresses(self) -> list[str]:
        return [address for address, _, _ in self.sent]


class FakeEndpoint:
    """Realtime connection double collecting the JSON messages pushed to it."""

    def __init__(self, *, fail: bool = False) -> None:
        self.messages: list[Any] = []
        self.fail = fail

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise RuntimeError("connection closed")
        self.messages.append(data)


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def registry() -> ChannelRegistry:
    return ChannelRegistry()


@pytest.fixture()
def email_dispatcher() -> RecordingEmailDispatcher:
    return RecordingEmailDispatcher()


@pytest.fixture()
def make_endpoint() -> Callable[..., FakeEndpoint]:
    return FakeEndpoint


@pytest.fixture()
def make_user() -> Callable[..., User]:
    """Insert a user directly and return it as a domain entity."""

    def _make_user(
        username: str,
        *,
        is_admin: bool = False,
        is_active: bool = True,
        email: str | None = None,
        email_notifications: bool = True,
        in_app_notifications: bool = True,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        if password not in _password_hashes:
            _password_hashes[password] = get_password_hash(password)
        with SessionLocal() as session:
            model = UserModel(
                username=username,
                name=username.title(),
                department="IT",
                email=email,
                password=_password_hashes[password],
                is_admin=is_admin,
                is_active=is_active,
                email_notifications=email_notifications,
                in_app_notifications=in_app_notifications,
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return UserRepository(session).get(model.id)

    return _make_user


@pytest.fixture()
def user_password() -> str:
    return DEFAULT_PASSWORD
