"""Notification-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_serializer

from campus_market.db.time import as_utc


class NotificationResponse(BaseModel):
    """Schema for a notification in the feed."""

    id: int
    recipient_uid: str
    message: str
    related_id: str | None
    type: str
    is_read: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """Render timestamps as UTC ISO-8601."""
        return as_utc(value).isoformat()

    model_config = ConfigDict(from_attributes=True)


class NotificationTargetResponse(BaseModel):
    """Where a click on a notification leads."""

    kind: Literal["message", "request", "unknown"]
    user_uid: str | None = None
    request_id: int | None = None
    display_name: str | None = None
    avatar_ref: str | None = None
