"""Direct message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from campus_market.db.time import as_utc


class MessageCreate(BaseModel):
    """Schema for sending a new direct message."""

    recipient_uid: str = Field(..., alias="recipientUid", min_length=1, description="Uid of the recipient")
    content: str = Field(..., description="Message body")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Schema for a stored message returned by the API."""

    id: int
    sender_uid: str
    recipient_uid: str
    content: str
    is_read: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """Render timestamps as UTC ISO-8601."""
        return as_utc(value).isoformat()

    model_config = ConfigDict(from_attributes=True)


class ConversationResponse(BaseModel):
    """Latest message with one counterpart, enriched with their identity."""

    other_uid: str
    other_name: str
    other_photo: str | None
    message_id: int
    content: str
    created_at: datetime
    is_read: bool
    sender_uid: str
    unread: bool

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """Render timestamps as UTC ISO-8601."""
        return as_utc(value).isoformat()

    model_config = ConfigDict(from_attributes=True)


class UnreadCountResponse(BaseModel):
    """Scalar unread counter."""

    count: int


class MarkReadResponse(BaseModel):
    """Result of a bulk read-state transition."""

    success: bool = True
    updated: int = Field(0, description="Rows changed by this call")
