"""Persistence layer for biometric access logs."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import BiometricLog
from app.infrastructure.models import BiometricLogModel
from app.utils import ensure_utc, now_naive_utc


class BiometricLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, log: BiometricLog) -> BiometricLog:
        model = BiometricLogModel(
            user_id=log.user_id,
            success=log.success,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            access_time=now_naive_utc(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent_for_user(self, user_id: int, *, limit: int = 10) -> Sequence[BiometricLog]:
        query = (
            self.session.query(BiometricLogModel)
            .filter(BiometricLogModel.user_id == user_id)
            .order_by(BiometricLogModel.access_time.desc(), BiometricLogModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: BiometricLogModel) -> BiometricLog:
        return BiometricLog(
            id=model.id,
            user_id=model.user_id,
            success=bool(model.success),
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            access_time=ensure_utc(model.access_time),
        )


__all__ = ["BiometricLogRepository"]
