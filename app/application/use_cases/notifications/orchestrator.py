"""Coordinate persistence and delivery of user notifications.

A call to :meth:`NotificationOrchestrator.notify` resolves the recipients of
a notification, writes one ledger row per recipient and then, depending on
each recipient's preferences, pushes the row to their live connections and
emails it. Every recipient is handled by its own task; a failure for one
recipient, or in one channel, is logged and never affects the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

import anyio
from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationPreference, RecipientSelector, User
from app.domain.exceptions import DeliveryFailure, NotFoundError, PersistenceFailure
from app.infrastructure.email import EmailDispatcher, render_notification_email
from app.infrastructure.notifications import ChannelRegistry, NotificationPublisher
from app.infrastructure.repositories import NotificationRepository

from .preferences import get_notification_preferences
from .recipients import resolve_recipients

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


@dataclass
class DeliveryReport:
    """Outcome of a single :meth:`NotificationOrchestrator.notify` call."""

    notification_ids: list[int] = field(default_factory=list)
    pushed: list[int] = field(default_factory=list)
    emailed: list[int] = field(default_factory=list)
    failed_recipients: list[int] = field(default_factory=list)


class NotificationOrchestrator:
    """Fan notifications out to the ledger, realtime channel and email."""

    def __init__(
        self,
        session_factory: SessionFactory,
        registry: ChannelRegistry,
        email_dispatcher: EmailDispatcher,
    ) -> None:
        self._session_factory = session_factory
        self._publisher = NotificationPublisher(registry)
        self._email_dispatcher = email_dispatcher

    async def notify(
        self,
        selector: RecipientSelector,
        event_type: str,
        title: str,
        message: str,
        payload: dict[str, Any] | None = None,
    ) -> DeliveryReport:
        """Persist and deliver a notification to every recipient of ``selector``.

        Returns once every recipient's ledger write and delivery attempts have
        completed. Never raises for persistence or delivery failures.
        """

        report = DeliveryReport()
        event_type = getattr(event_type, "value", event_type)
        try:
            recipients = await to_thread.run_sync(self._resolve, selector)
        except NotFoundError as exc:
            logger.warning("Skipping %s notification: %s", event_type, exc)
            return report
        except SQLAlchemyError:
            logger.exception("Could not resolve recipients for %s notification", event_type)
            return report

        if not recipients:
            logger.info("No active recipients for %s notification", event_type)
            return report

        content = dict(payload or {})
        async with anyio.create_task_group() as task_group:
            for recipient in recipients:
                task_group.start_soon(
                    self._deliver_to_recipient,
                    recipient,
                    event_type,
                    title,
                    message,
                    content,
                    report,
                )
        return report

    async def _deliver_to_recipient(
        self,
        recipient: User,
        event_type: str,
        title: str,
        message: str,
        payload: dict[str, Any],
        report: DeliveryReport,
    ) -> None:
        try:
            await self._deliver(recipient, event_type, title, message, payload, report)
        except Exception:
            logger.exception(
                "Unexpected failure delivering %s notification to user %s", event_type, recipient.id
            )
            if recipient.id not in report.failed_recipients:
                report.failed_recipients.append(recipient.id)

    async def _deliver(
        self,
        recipient: User,
        event_type: str,
        title: str,
        message: str,
        payload: dict[str, Any],
        report: DeliveryReport,
    ) -> None:
        try:
            notification = await to_thread.run_sync(
                self._append, recipient.id, event_type, title, message, payload
            )
        except PersistenceFailure:
            logger.exception("Notification ledger write failed for user %s", recipient.id)
            report.failed_recipients.append(recipient.id)
            return
        report.notification_ids.append(notification.id)

        try:
            preference = await to_thread.run_sync(self._read_preference, recipient.id)
        except (NotFoundError, SQLAlchemyError):
            logger.exception(
                "Could not read notification preferences of user %s; notification %s stored only",
                recipient.id,
                notification.id,
            )
            return

        async with anyio.create_task_group() as task_group:
            if preference.in_app_enabled:
                task_group.start_soon(self._attempt, self._push, notification, report)
            if preference.email_enabled and recipient.email:
                task_group.start_soon(
                    self._attempt, partial(self._email, recipient.email), notification, report
                )

    async def _attempt(self, channel, notification: Notification, report: DeliveryReport) -> None:
        try:
            await channel(notification, report)
        except DeliveryFailure as exc:
            logger.warning("%s", exc)

    async def _push(self, notification: Notification, report: DeliveryReport) -> None:
        try:
            delivered = await self._publisher.publish(notification)
        except Exception as exc:
            raise DeliveryFailure(
                f"Realtime push of notification {notification.id} failed: {exc}"
            ) from exc
        if delivered:
            report.pushed.append(notification.recipient_id)
        else:
            logger.debug(
                "User %s has no live connection; notification %s kept in ledger only",
                notification.recipient_id,
                notification.id,
            )

    async def _email(
        self, address: str, notification: Notification, report: DeliveryReport
    ) -> None:
        subject, body_html = render_notification_email(notification.title, notification.message)
        if not await self._email_dispatcher.send(address, subject, body_html):
            raise DeliveryFailure(
                f"Email for notification {notification.id} to {address} was not delivered"
            )
        report.emailed.append(notification.recipient_id)

    def _resolve(self, selector: RecipientSelector) -> list[User]:
        session = self._session_factory()
        try:
            return resolve_recipients(session, selector)
        finally:
            session.close()

    def _append(
        self,
        recipient_id: int,
        event_type: str,
        title: str,
        message: str,
        payload: dict[str, Any],
    ) -> Notification:
        session = self._session_factory()
        try:
            return NotificationRepository(session).append(
                recipient_id=recipient_id,
                notification_type=event_type,
                title=title,
                message=message,
                payload=payload,
            )
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceFailure(
                f"Could not store {event_type} notification for user {recipient_id}"
            ) from exc
        finally:
            session.close()

    def _read_preference(self, user_id: int) -> NotificationPreference:
        session = self._session_factory()
        try:
            return get_notification_preferences(session, user_id)
        finally:
            session.close()


__all__ = ["DeliveryReport", "NotificationOrchestrator", "SessionFactory"]
