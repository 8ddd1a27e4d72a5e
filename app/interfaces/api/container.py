"""Explicitly owned notification services shared by the HTTP and websocket routes."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.application.use_cases.notifications import NotificationOrchestrator, SessionFactory
from app.infrastructure.email import EmailDispatcher
from app.infrastructure.notifications import ChannelRegistry, RealtimeEventPublisher


@dataclass
class NotificationServices:
    """Single registry instance and the components that push through it."""

    session_factory: SessionFactory
    registry: ChannelRegistry
    orchestrator: NotificationOrchestrator
    realtime: RealtimeEventPublisher


def build_notification_services(
    session_factory: SessionFactory,
    *,
    registry: ChannelRegistry | None = None,
    email_dispatcher: EmailDispatcher | None = None,
) -> NotificationServices:
    """Wire the registry, orchestrator and realtime publisher together."""

    registry = registry or ChannelRegistry()
    orchestrator = NotificationOrchestrator(
        session_factory, registry, email_dispatcher or EmailDispatcher()
    )
    return NotificationServices(
        session_factory=session_factory,
        registry=registry,
        orchestrator=orchestrator,
        realtime=RealtimeEventPublisher(registry),
    )


def get_notification_services(request: Request) -> NotificationServices:
    """FastAPI dependency returning the services attached to the application."""

    return request.app.state.notification_services


__all__ = [
    "NotificationServices",
    "build_notification_services",
    "get_notification_services",
]
