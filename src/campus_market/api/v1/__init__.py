"""Version 1 API endpoints."""

from .endpoints import (
    messages_router,
    notifications_router,
    requests_router,
    users_router,
)

__all__ = [
    "messages_router",
    "notifications_router",
    "requests_router",
    "users_router",
]
