"""Use cases for support tickets."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    DEFAULT_TICKET_PRIORITY,
    TICKET_PRIORITIES,
    TICKET_STATUSES,
    TICKET_STATUS_OPEN,
    Ticket,
)
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TicketRepository


def create_ticket(
    session: Session,
    *,
    user_id: int,
    subject: str,
    description: str,
    priority: str | None = None,
) -> Ticket:
    """File a new open ticket on behalf of ``user_id``."""

    priority = priority or DEFAULT_TICKET_PRIORITY
    if priority not in TICKET_PRIORITIES:
        raise ValueError(f"Unsupported ticket priority: {priority}")
    if not subject.strip():
        raise ValueError("Ticket subject is required")

    ticket = Ticket(
        id=None,
        user_id=user_id,
        subject=subject.strip(),
        description=description,
        status=TICKET_STATUS_OPEN,
        priority=priority,
        created_at=None,
        updated_at=None,
    )
    return TicketRepository(session).create(ticket)


def list_user_tickets(session: Session, user_id: int) -> Sequence[Ticket]:
    return TicketRepository(session).list_for_user(user_id)


def list_all_tickets(session: Session) -> Sequence[Ticket]:
    return TicketRepository(session).list()


def update_ticket_status(session: Session, ticket_id: int, *, status: str) -> Ticket:
    """Move ``ticket_id`` to ``status``."""

    if status not in TICKET_STATUSES:
        raise ValueError(f"Unsupported ticket status: {status}")
    ticket = TicketRepository(session).update_status(ticket_id, status)
    if ticket is None:
        raise NotFoundError("Ticket not found")
    return ticket


__all__ = [
    "create_ticket",
    "list_all_tickets",
    "list_user_tickets",
    "update_ticket_status",
]
