"""SQLAlchemy models for the Campus Market application."""

from .message import Message
from .notification import Notification
from .request import ServiceRequest
from .service import Service
from .user import User

__all__ = [
    "Message",
    "Notification",
    "ServiceRequest",
    "Service",
    "User",
]
