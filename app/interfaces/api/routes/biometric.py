"""Routes recording biometric access attempts."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.orm import Session

from app.application.use_cases.biometric import list_biometric_history, log_biometric_access
from app.application.use_cases.notifications import notify_biometric_failure
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.container import NotificationServices, get_notification_services
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.schemas import BiometricLogCreate, BiometricLogRead

router = APIRouter(prefix="/biometric", tags=["biometric"])


@router.post("/log", response_model=BiometricLogRead, status_code=status.HTTP_201_CREATED)
def log_access(
    payload: BiometricLogCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    services: NotificationServices = Depends(get_notification_services),
) -> BiometricLogRead:
    """Record an access attempt; failed attempts alert the administrators."""

    ip_address = request.client.host if request.client else None
    log = log_biometric_access(
        db,
        user_id=current_user.id,
        success=payload.success,
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )
    if not log.success:
        background_tasks.add_task(
            notify_biometric_failure,
            services.orchestrator,
            user=current_user,
            ip_address=ip_address,
        )
    return BiometricLogRead.model_validate(log)


@router.get("/history", response_model=list[BiometricLogRead])
def history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[BiometricLogRead]:
    return [BiometricLogRead.model_validate(log) for log in list_biometric_history(db, current_user.id)]
