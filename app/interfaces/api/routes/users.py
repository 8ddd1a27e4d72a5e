"""Routes to create users and read the caller's profile."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_user_created
from app.application.use_cases.users import create_user as create_user_uc, get_user
from app.domain.entities import User
from app.domain.exceptions import NotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.container import NotificationServices, get_notification_services
from app.interfaces.api.dependencies import get_current_active_user, require_admin
from app.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    services: NotificationServices = Depends(get_notification_services),
) -> UserRead:
    """Create a new account; administrators are notified afterwards."""

    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            password=user_in.password,
            name=user_in.name,
            department=user_in.department,
            email=user_in.email,
            is_admin=user_in.is_admin,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("User %s created by %s", user.username, current_user.username)
    background_tasks.add_task(
        notify_user_created, services.orchestrator, user=user, created_by=current_user.id
    )
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def read_profile(current_user: User = Depends(get_current_active_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UserRead:
    try:
        user = get_user(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return UserRead.model_validate(user)
