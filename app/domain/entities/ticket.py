"""Domain entity representing a support ticket."""

from dataclasses import dataclass
from datetime import datetime

TICKET_STATUS_OPEN = "open"
TICKET_STATUS_IN_PROGRESS = "in_progress"
TICKET_STATUS_RESOLVED = "resolved"
TICKET_STATUS_CLOSED = "closed"
TICKET_STATUSES = (
    TICKET_STATUS_OPEN,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_RESOLVED,
    TICKET_STATUS_CLOSED,
)

TICKET_PRIORITIES = ("low", "medium", "high", "urgent")
DEFAULT_TICKET_PRIORITY = "medium"


@dataclass
class Ticket:
    """Support request filed by a user."""

    id: int | None
    user_id: int
    subject: str
    description: str
    status: str
    priority: str
    created_at: datetime | None
    updated_at: datetime | None


__all__ = [
    "DEFAULT_TICKET_PRIORITY",
    "TICKET_PRIORITIES",
    "TICKET_STATUSES",
    "TICKET_STATUS_CLOSED",
    "TICKET_STATUS_IN_PROGRESS",
    "TICKET_STATUS_OPEN",
    "TICKET_STATUS_RESOLVED",
    "Ticket",
]
