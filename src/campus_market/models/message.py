"""Models describing direct messages between users."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class Message(Base):
    """One directed message from a sender to a recipient.

    Rows are append-only; `is_read` is the only mutable column and only ever
    moves from False to True.
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)
    recipient_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_messages_pair", "sender_uid", "recipient_uid"),
        Index("ix_messages_recipient_unread", "recipient_uid", "is_read"),
    )
