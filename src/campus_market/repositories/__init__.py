"""Persistence operations used by the messaging core."""

from .message_repo import MessageRepository
from .notification_repo import NotificationRepository
from .request_repo import RequestRepository

__all__ = ["MessageRepository", "NotificationRepository", "RequestRepository"]
