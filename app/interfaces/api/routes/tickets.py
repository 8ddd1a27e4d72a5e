"""Routes for filing and handling support tickets."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    broadcast_ticket_board_change,
    notify_ticket_created,
    notify_ticket_status_changed,
)
from app.application.use_cases.tickets import (
    create_ticket as create_ticket_uc,
    list_all_tickets,
    list_user_tickets,
    update_ticket_status as update_ticket_status_uc,
)
from app.domain.entities import User
from app.domain.exceptions import NotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.container import NotificationServices, get_notification_services
from app.interfaces.api.dependencies import get_current_active_user, require_admin
from app.interfaces.api.schemas import TicketCreate, TicketRead, TicketStatusUpdate

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("/", response_model=list[TicketRead])
def list_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[TicketRead]:
    return [TicketRead.model_validate(ticket) for ticket in list_user_tickets(db, current_user.id)]


@router.post("/", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
def create_ticket(
    ticket_in: TicketCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    services: NotificationServices = Depends(get_notification_services),
) -> TicketRead:
    """File a ticket; administrators are notified after the response is sent."""

    try:
        ticket = create_ticket_uc(
            db,
            user_id=current_user.id,
            subject=ticket_in.subject,
            description=ticket_in.description,
            priority=ticket_in.priority,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    # The board refresh must not wait behind email delivery.
    background_tasks.add_task(
        broadcast_ticket_board_change, services.realtime, ticket=ticket, change_type="created"
    )
    background_tasks.add_task(notify_ticket_created, services.orchestrator, ticket=ticket)
    return TicketRead.model_validate(ticket)


@router.get("/all", response_model=list[TicketRead])
def list_every_ticket(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[TicketRead]:
    return [TicketRead.model_validate(ticket) for ticket in list_all_tickets(db)]


@router.put("/{ticket_id}/status", response_model=TicketRead)
def update_ticket_status(
    ticket_id: int,
    payload: TicketStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    services: NotificationServices = Depends(get_notification_services),
) -> TicketRead:
    """Change a ticket's status and notify its owner."""

    try:
        ticket = update_ticket_status_uc(db, ticket_id, status=payload.status)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    background_tasks.add_task(
        broadcast_ticket_board_change, services.realtime, ticket=ticket, change_type="updated"
    )
    background_tasks.add_task(notify_ticket_status_changed, services.orchestrator, ticket=ticket)
    return TicketRead.model_validate(ticket)
