"""Schemas describing biometric access attempts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BiometricLogCreate(BaseModel):
    success: bool


class BiometricLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    success: bool
    ip_address: str | None = None
    user_agent: str | None = None
    access_time: datetime | None = None


__all__ = ["BiometricLogCreate", "BiometricLogRead"]
