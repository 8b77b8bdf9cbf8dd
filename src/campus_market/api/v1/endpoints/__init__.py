"""API endpoint modules for version 1."""

from .messages import router as messages_router
from .notifications import router as notifications_router
from .requests import router as requests_router
from .users import router as users_router

__all__ = [
    "messages_router",
    "notifications_router",
    "requests_router",
    "users_router",
]
