"""Use cases for biometric access logging."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import BiometricLog
from app.infrastructure.repositories import BiometricLogRepository

HISTORY_LIMIT = 10


def log_biometric_access(
    session: Session,
    *,
    user_id: int,
    success: bool,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> BiometricLog:
    log = BiometricLog(
        id=None,
        user_id=user_id,
        success=bool(success),
        ip_address=ip_address,
        user_agent=user_agent,
        access_time=None,
    )
    return BiometricLogRepository(session).create(log)


def list_biometric_history(session: Session, user_id: int) -> Sequence[BiometricLog]:
    """Return the latest access attempts of ``user_id``."""

    return BiometricLogRepository(session).list_recent_for_user(user_id, limit=HISTORY_LIMIT)


__all__ = ["HISTORY_LIMIT", "list_biometric_history", "log_biometric_access"]
