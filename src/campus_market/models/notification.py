"""Notification model."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class Notification(Base):
    """Alert delivered to a single recipient.

    `related_id` is interpreted by `type`: a sender uid for
    `message_received`, a request id for `request_received`. The read flag is
    stored independently of the message or request it points to.
    """

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    related_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_notifications_recipient_unread", "recipient_uid", "is_read"),
    )
