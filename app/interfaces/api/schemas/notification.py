"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    type: str
    title: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime


class UnreadCountRead(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    updated: int
    message: str


class NotificationPreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email_enabled: bool
    in_app_enabled: bool


class NotificationPreferenceUpdate(BaseModel):
    """Overwrite both notification channels of the authenticated user.

    Also accepts the camelCase field names used by older clients.
    """

    email_enabled: bool = Field(
        ..., validation_alias=AliasChoices("email_enabled", "emailNotifications")
    )
    in_app_enabled: bool = Field(
        ..., validation_alias=AliasChoices("in_app_enabled", "inAppNotifications")
    )


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "UnreadCountRead",
]
