"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from anyio import to_thread
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    SessionFactory,
    count_unread_notifications,
    get_notification_preferences,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    update_notification_preferences,
)
from app.config import get_settings
from app.domain.entities import Notification, User
from app.domain.exceptions import NotFoundError, PreferenceValidationError
from app.infrastructure.database import get_db
from app.infrastructure.notifications import ADMIN_GROUP, serialize_notification
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.container import NotificationServices
from app.interfaces.api.dependencies import get_current_active_user, resolve_current_user
from app.interfaces.api.schemas import (
    MarkAllReadResponse,
    MessageResponse,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[NotificationRead])
def list_user_notifications(
    limit: int | None = Query(default=None, ge=1),
    unread_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    history_limit = get_settings().notification_history_limit
    effective_limit = min(limit or history_limit, history_limit)
    notifications = list_notifications(
        db, current_user.id, limit=effective_limit, unread_only=unread_only
    )
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(unread=count_unread_notifications(db, current_user.id))


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of the authenticated user as read."""

    updated = mark_all_notifications_read(db, current_user.id)
    return MarkAllReadResponse(
        updated=updated, message=f"{updated} notifications marked as read"
    )


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Mark a single notification owned by the authenticated user as read."""

    try:
        mark_notification_read(db, notification_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MessageResponse(message="Notification marked as read")


@router.get("/preferences", response_model=NotificationPreferenceRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferenceRead:
    try:
        preference = get_notification_preferences(db, current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationPreferenceRead.model_validate(preference)


@router.put("/preferences", response_model=NotificationPreferenceRead)
def update_preferences(
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferenceRead:
    """Choose whether notifications arrive in-app, by email, both or neither."""

    try:
        preference = update_notification_preferences(
            db,
            current_user.id,
            email_enabled=payload.email_enabled,
            in_app_enabled=payload.in_app_enabled,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PreferenceValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return NotificationPreferenceRead.model_validate(preference)


def _open_session(
    session_factory: SessionFactory, token: str
) -> tuple[User, Sequence[Notification]]:
    session = session_factory()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending = NotificationRepository(session).list_for_user(
            user.id,
            limit=get_settings().notification_history_limit,
            unread_only=True,
        )
        return user, pending
    finally:
        session.close()


def _acknowledge(session_factory: SessionFactory, ids: list[int], user_id: int) -> int:
    session = session_factory()
    try:
        return NotificationRepository(session).mark_many_read(ids, user_id=user_id)
    finally:
        session.close()


def _valid_ids(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, int) and not isinstance(item, bool)]


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    The connection joins the identity carried by the ``token`` query
    parameter, plus the admin broadcast group for administrators.
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    services: NotificationServices = websocket.app.state.notification_services
    try:
        user, pending = await to_thread.run_sync(_open_session, services.session_factory, token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    except SQLAlchemyError:
        logger.exception("Could not open notification session")
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    await websocket.accept()
    registry = services.registry
    registry.join(websocket, user.id)
    if user.is_admin:
        registry.join_group(websocket, ADMIN_GROUP)
    logger.info("User %s connected to realtime notifications", user.id)

    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except (KeyError, ValueError):
                # Binary frames and malformed JSON are ignored.
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = _valid_ids(message.get("ids"))
                updated = 0
                if ids:
                    updated = await to_thread.run_sync(
                        _acknowledge, services.session_factory, ids, user.id
                    )
                await websocket.send_json({"type": "acknowledged", "updated": updated})
            elif message_type == "authenticate":
                declared = message.get("user_id")
                if declared != user.id:
                    await websocket.send_json(
                        {"type": "error", "detail": "Declared identity does not match the session"}
                    )
                    continue
                registry.join(websocket, user.id)
                await websocket.send_json({"type": "authenticated", "user_id": user.id})
    except WebSocketDisconnect:
        logger.info("User %s disconnected from realtime notifications", user.id)
    finally:
        registry.leave(websocket)
