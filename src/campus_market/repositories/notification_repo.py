"""Data access helpers for notification rows."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from campus_market.models.notification import Notification

__all__ = ["NotificationRepository"]


class NotificationRepository:
    """Thin wrapper around database access for notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(
        self,
        *,
        recipient_uid: str,
        message: str,
        related_id: str | None,
        type_: str,
    ) -> Notification:
        """Append a notification and flush it."""
        notification = Notification(
            recipient_uid=recipient_uid,
            message=message,
            related_id=related_id,
            type=type_,
            is_read=False,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def get_by_id(self, notification_id: int) -> Notification | None:
        """Return a notification by identifier."""
        return self.session.get(Notification, notification_id)

    def select_by_recipient(self, recipient_uid: str, limit: int) -> list[Notification]:
        """Return the newest notifications for a recipient."""
        stmt = (
            select(Notification)
            .where(Notification.recipient_uid == recipient_uid)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def mark_read(self, *, notification_id: int, recipient_uid: str) -> int:
        """Set the read flag when the notification belongs to `recipient_uid`."""
        stmt = (
            update(Notification)
            .where(
                Notification.id == notification_id,
                Notification.recipient_uid == recipient_uid,
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def count_unread(self, recipient_uid: str) -> int:
        """Return the number of unread notifications for a recipient."""
        stmt = select(func.count(Notification.id)).where(
            Notification.recipient_uid == recipient_uid,
            Notification.is_read.is_(False),
        )
        return int(self.session.scalar(stmt) or 0)
