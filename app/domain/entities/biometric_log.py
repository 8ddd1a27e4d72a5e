"""Domain entity recording a biometric access attempt."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BiometricLog:
    id: int | None
    user_id: int
    success: bool
    ip_address: str | None
    user_agent: str | None
    access_time: datetime | None


__all__ = ["BiometricLog"]
