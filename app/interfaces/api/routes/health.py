from fastapi import APIRouter

from app.utils import now_utc

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "OK", "timestamp": now_utc().isoformat()}
