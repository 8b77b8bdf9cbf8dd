"""Direct message endpoints for the Campus Market API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from campus_market.core.errors import MarketError
from campus_market.schemas.message import (
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
    UnreadCountResponse,
)
from campus_market.services import conversations, messaging

from ..dependencies import CurrentUserDep, SessionDep, to_http_error

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def send_message(
    message_data: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Send a direct message and notify the recipient."""
    try:
        message = messaging.send_message(
            db,
            current_user.uid,
            message_data.recipient_uid,
            message_data.content,
        )
    except MarketError as exc:
        raise to_http_error(exc) from exc
    return MessageResponse.model_validate(message)


# Static paths are registered before /{other_uid} so they are never captured by it.
@router.get("/conversations", response_model=list[ConversationResponse])
async def get_conversations(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[ConversationResponse]:
    """List the latest message with every counterpart, most recent first."""
    summaries = conversations.list_conversations(db, current_user.uid)
    return [ConversationResponse.model_validate(summary) for summary in summaries]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UnreadCountResponse:
    """Return the number of unread messages addressed to the caller."""
    return UnreadCountResponse(count=messaging.unread_count(db, current_user.uid))


@router.get("/{other_uid}", response_model=list[MessageResponse])
async def get_thread(
    other_uid: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[MessageResponse]:
    """Return the full thread with another user, oldest first."""
    thread = messaging.list_between(db, current_user.uid, other_uid)
    return [MessageResponse.model_validate(message) for message in thread]


@router.patch("/{other_uid}/read", response_model=MarkReadResponse)
async def mark_thread_read(
    other_uid: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MarkReadResponse:
    """Mark every message the other user sent to the caller as read."""
    if not other_uid.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Counterpart is required",
        )
    updated = messaging.mark_read(db, current_user.uid, other_uid)
    return MarkReadResponse(updated=updated)
