"""Notification emission, the per-user feed and click-through resolution."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.core.constants import NOTIFICATION_MESSAGE_RECEIVED, NOTIFICATION_REQUEST_RECEIVED
from campus_market.core.errors import PermissionDeniedError
from campus_market.core.settings import settings
from campus_market.models.notification import Notification
from campus_market.repositories.notification_repo import NotificationRepository
from campus_market.repositories.request_repo import RequestRepository
from campus_market.services.identity import Identity, resolve_identity

logger = logging.getLogger(__name__)


class NotificationEmitter:
    """Appends notifications without ever failing the caller.

    Emission runs after the triggering write has been committed. A failure
    here is logged and swallowed, which leaves the primary row without a
    matching notification.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = NotificationRepository(db)

    def emit(
        self,
        recipient_uid: str,
        text: str,
        related_id: str | None,
        type_: str,
    ) -> Notification | None:
        """Append a notification; return None if the append failed."""
        try:
            with self.db.begin_nested():
                notification = self.repo.insert(
                    recipient_uid=recipient_uid,
                    message=text,
                    related_id=related_id,
                    type_=type_,
                )
            self.db.commit()
        except SQLAlchemyError:
            logger.exception(
                "Failed to emit %s notification for %s (related_id=%s)",
                type_,
                recipient_uid,
                related_id,
            )
            self.db.rollback()
            return None
        return notification


@dataclass(frozen=True)
class MessageTarget:
    """Click-through target of a `message_received` notification."""

    user_uid: str


@dataclass(frozen=True)
class RequestTarget:
    """Click-through target of a `request_received` notification."""

    request_id: int


@dataclass(frozen=True)
class UnknownTarget:
    """Target of a notification whose type or reference cannot be interpreted."""

    type: str


NotificationTarget = MessageTarget | RequestTarget | UnknownTarget


def resolve_target(notification: Notification) -> NotificationTarget:
    """Interpret `related_id` according to the notification type."""
    related = notification.related_id
    if notification.type == NOTIFICATION_MESSAGE_RECEIVED and related:
        return MessageTarget(user_uid=related)
    if notification.type == NOTIFICATION_REQUEST_RECEIVED and related:
        try:
            return RequestTarget(request_id=int(related))
        except ValueError:
            logger.warning("Notification %s has non-numeric request id %r", notification.id, related)
    return UnknownTarget(type=notification.type)


class NotificationFeed:
    """Read side of the notification table for one session."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = NotificationRepository(db)

    def list(self, recipient_uid: str, limit: int | None = None) -> list[Notification]:
        """Return the recipient's notifications, newest first."""
        cap = settings.notification_feed_limit if limit is None else limit
        return self.repo.select_by_recipient(recipient_uid, cap)

    def mark_read(self, notification_id: int, recipient_uid: str) -> int:
        """Mark one notification read if `recipient_uid` owns it.

        Returns the number of rows changed; zero covers not-owned, missing
        and already-read alike.
        """
        changed = self.repo.mark_read(notification_id=notification_id, recipient_uid=recipient_uid)
        self.db.commit()
        return changed

    def unread_count(self, recipient_uid: str) -> int:
        """Return the recipient's unread notification count."""
        return self.repo.count_unread(recipient_uid)

    def get_owned(self, notification_id: int, recipient_uid: str) -> Notification:
        """Return the notification only when it belongs to `recipient_uid`.

        Raises:
            PermissionDeniedError: If it is missing or owned by someone else.
        """
        notification = self.repo.get_by_id(notification_id)
        if notification is None or notification.recipient_uid != recipient_uid:
            raise PermissionDeniedError("Not permitted")
        return notification

    def resolve_conversation_partner(self, notification: Notification) -> Identity | None:
        """Return the user a click on this notification should open a chat with.

        Request notifications take two lookups: the request row yields the
        seeker uid, which is then resolved to an identity.
        """
        target = resolve_target(notification)
        if isinstance(target, MessageTarget):
            return resolve_identity(self.db, target.user_uid)
        if isinstance(target, RequestTarget):
            request = RequestRepository(self.db).get_by_id(target.request_id)
            if request is None:
                return None
            return resolve_identity(self.db, request.seeker_uid)
        return None
