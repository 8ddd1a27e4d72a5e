"""Age-based purge of old notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import anyio
from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository
from app.utils import now_utc

from .orchestrator import SessionFactory

logger = logging.getLogger(__name__)


def purge_expired_notifications(
    session: Session, *, retention_days: int, now: datetime | None = None
) -> int:
    """Delete notifications older than ``retention_days`` and return how many.

    A non-positive ``retention_days`` disables the purge.
    """

    if retention_days <= 0:
        return 0
    cutoff = (now or now_utc()) - timedelta(days=retention_days)
    removed = NotificationRepository(session).delete_created_before(cutoff)
    if removed:
        logger.info("Purged %s notification(s) created before %s", removed, cutoff.isoformat())
    return removed


async def run_retention_loop(
    session_factory: SessionFactory, *, retention_days: int, interval_seconds: float
) -> None:
    """Purge expired notifications now and then every ``interval_seconds``."""

    if retention_days <= 0:
        logger.info("Notification retention disabled")
        return

    def _purge_once() -> int:
        session = session_factory()
        try:
            return purge_expired_notifications(session, retention_days=retention_days)
        finally:
            session.close()

    while True:
        try:
            await to_thread.run_sync(_purge_once)
        except SQLAlchemyError:
            logger.exception("Notification retention purge failed")
        await anyio.sleep(interval_seconds)


__all__ = ["purge_expired_notifications", "run_retention_loop"]
