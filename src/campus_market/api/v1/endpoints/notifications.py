"""Notification feed endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from campus_market.core.errors import MarketError
from campus_market.core.settings import settings
from campus_market.schemas.common import SuccessResponse
from campus_market.schemas.message import UnreadCountResponse
from campus_market.schemas.notification import NotificationResponse, NotificationTargetResponse
from campus_market.services.notifications import (
    MessageTarget,
    NotificationFeed,
    RequestTarget,
    resolve_target,
)

from ..dependencies import CurrentUserDep, SessionDep, to_http_error

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int = Query(settings.notification_feed_limit, ge=1, le=settings.notification_feed_limit),
) -> list[NotificationResponse]:
    """Return the caller's notifications, newest first."""
    feed = NotificationFeed(db)
    return [NotificationResponse.model_validate(n) for n in feed.list(current_user.uid, limit)]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UnreadCountResponse:
    """Return the caller's unread notification count."""
    return UnreadCountResponse(count=NotificationFeed(db).unread_count(current_user.uid))


@router.patch("/{notification_id}/read", response_model=SuccessResponse)
async def mark_notification_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SuccessResponse:
    """Mark one of the caller's notifications as read.

    Notifications owned by someone else are left untouched and the response
    is identical, so callers learn nothing about them.
    """
    NotificationFeed(db).mark_read(notification_id, current_user.uid)
    return SuccessResponse()


@router.get("/{notification_id}/target", response_model=NotificationTargetResponse)
async def get_notification_target(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> NotificationTargetResponse:
    """Resolve who a click on this notification should open a conversation with."""
    feed = NotificationFeed(db)
    try:
        notification = feed.get_owned(notification_id, current_user.uid)
    except MarketError as exc:
        raise to_http_error(exc) from exc

    target = resolve_target(notification)
    partner = feed.resolve_conversation_partner(notification)
    response = NotificationTargetResponse(kind="unknown")
    if isinstance(target, MessageTarget):
        response = NotificationTargetResponse(kind="message", user_uid=target.user_uid)
    elif isinstance(target, RequestTarget):
        response = NotificationTargetResponse(kind="request", request_id=target.request_id)

    if partner is not None:
        response.user_uid = partner.uid
        response.display_name = partner.display_name
        response.avatar_ref = partner.avatar_ref
    return response
