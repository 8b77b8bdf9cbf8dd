"""Direct message store: sending, threads, read state and unread totals."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from campus_market.core.constants import NOTIFICATION_MESSAGE_RECEIVED
from campus_market.core.errors import NotFoundError, ValidationError
from campus_market.core.settings import settings
from campus_market.models.message import Message
from campus_market.repositories.message_repo import MessageRepository
from campus_market.services.identity import display_name_or, get_user
from campus_market.services.notifications import NotificationEmitter

__all__ = [
    "send_message",
    "list_between",
    "mark_read",
    "unread_count",
]

logger = logging.getLogger(__name__)


def send_message(
    db: Session,
    sender_uid: str,
    recipient_uid: str,
    content: str,
    *,
    emitter: NotificationEmitter | None = None,
) -> Message:
    """Persist a message and notify the recipient.

    Args:
        db: Database session.
        sender_uid: Uid of the authenticated sender.
        recipient_uid: Uid of the recipient.
        content: Message body, stored verbatim.
        emitter: Notification emitter; one bound to `db` is created if omitted.

    Returns:
        The committed message.

    Raises:
        ValidationError: If the body is blank and blank bodies are rejected.
        NotFoundError: If the sender or the recipient does not exist.
    """
    if content is None or (settings.reject_blank_messages and not content.strip()):
        raise ValidationError("Message content must not be empty")
    if not recipient_uid:
        raise ValidationError("Recipient is required")

    if get_user(db, sender_uid) is None:
        raise NotFoundError("Sender not found")
    if get_user(db, recipient_uid) is None:
        raise NotFoundError("Recipient not found")

    sender_name = display_name_or(db, sender_uid, settings.sender_fallback_name)
    logger.info("Sending message from %s (%s) to %s", sender_uid, sender_name, recipient_uid)

    message = MessageRepository(db).insert(
        sender_uid=sender_uid,
        recipient_uid=recipient_uid,
        content=content,
    )
    db.commit()
    db.refresh(message)

    (emitter or NotificationEmitter(db)).emit(
        recipient_uid,
        f"New message from {sender_name}",
        sender_uid,
        NOTIFICATION_MESSAGE_RECEIVED,
    )
    return message


def list_between(db: Session, user_a: str, user_b: str) -> list[Message]:
    """Return the thread between two users in both directions, oldest first."""
    return MessageRepository(db).select_by_pair(user_a, user_b)


def mark_read(db: Session, recipient_uid: str, counterpart_uid: str) -> int:
    """Mark every unread message from `counterpart_uid` to `recipient_uid` as read.

    Messages the recipient sent to the counterpart are never touched. A
    repeated call changes zero rows.
    """
    changed = MessageRepository(db).mark_read_from(
        recipient_uid=recipient_uid,
        sender_uid=counterpart_uid,
    )
    db.commit()
    return changed


def unread_count(db: Session, user_uid: str) -> int:
    """Return the number of unread messages addressed to `user_uid`."""
    return MessageRepository(db).count_unread(user_uid)
