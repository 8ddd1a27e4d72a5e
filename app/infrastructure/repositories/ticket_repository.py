"""Persistence layer for support tickets."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Ticket
from app.infrastructure.models import TicketModel
from app.utils import ensure_utc, now_naive_utc


class TicketRepository:
    """Provide CRUD operations for :class:`Ticket` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, ticket_id: int) -> Ticket | None:
        model = self.session.get(TicketModel, ticket_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[Ticket]:
        query = (
            self.session.query(TicketModel)
            .filter(TicketModel.user_id == user_id)
            .order_by(TicketModel.created_at.desc(), TicketModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list(self) -> Sequence[Ticket]:
        query = self.session.query(TicketModel).order_by(
            TicketModel.created_at.desc(), TicketModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, ticket: Ticket) -> Ticket:
        now = now_naive_utc()
        model = TicketModel(
            user_id=ticket.user_id,
            subject=ticket.subject,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, ticket_id: int, status: str) -> Ticket | None:
        model = self.session.get(TicketModel, ticket_id)
        if model is None:
            return None
        model.status = status
        model.updated_at = now_naive_utc()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: TicketModel) -> Ticket:
        return Ticket(
            id=model.id,
            user_id=model.user_id,
            subject=model.subject,
            description=model.description,
            status=model.status,
            priority=model.priority,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["TicketRepository"]
