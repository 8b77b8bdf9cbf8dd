"""Pydantic schemas for the Campus Market API."""

from .common import SuccessResponse
from .message import (
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
    UnreadCountResponse,
)
from .notification import NotificationResponse, NotificationTargetResponse
from .request import ServiceRequestCreate, ServiceRequestCreated, ServiceRequestResponse
from .user import UserIdentityResponse

__all__ = [
    "SuccessResponse",
    "ConversationResponse",
    "MarkReadResponse",
    "MessageCreate",
    "MessageResponse",
    "UnreadCountResponse",
    "NotificationResponse",
    "NotificationTargetResponse",
    "ServiceRequestCreate",
    "ServiceRequestCreated",
    "ServiceRequestResponse",
    "UserIdentityResponse",
]
