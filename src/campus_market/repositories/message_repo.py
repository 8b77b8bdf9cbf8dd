"""Data access helpers for working with direct messages."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, case, func, or_, select, update
from sqlalchemy.orm import Session

from campus_market.models.message import Message

__all__ = ["MessageRepository"]


class MessageRepository:
    """Thin wrapper around database access for message rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def insert(self, *, sender_uid: str, recipient_uid: str, content: str) -> Message:
        """Insert a new unread message and return the flushed ORM instance."""
        message = Message(
            sender_uid=sender_uid,
            recipient_uid=recipient_uid,
            content=content,
            is_read=False,
        )
        self.session.add(message)
        self.session.flush()
        return message

    def select_by_pair(self, user_a: str, user_b: str) -> list[Message]:
        """Return every message exchanged between two users, oldest first."""
        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_uid == user_a, Message.recipient_uid == user_b),
                    and_(Message.sender_uid == user_b, Message.recipient_uid == user_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list(self.session.scalars(stmt))

    def select_latest_by_participant(self, user_uid: str) -> Sequence[tuple[Message, str]]:
        """Return the newest message per counterpart of `user_uid`.

        Each row pairs the message with the counterpart uid. Rows are ordered
        by recency, newest first, with the message id breaking timestamp ties.
        """
        counterpart = case(
            (Message.sender_uid == user_uid, Message.recipient_uid),
            else_=Message.sender_uid,
        )
        ranked = (
            select(
                Message.id.label("message_id"),
                counterpart.label("other_uid"),
                func.row_number()
                .over(
                    partition_by=counterpart,
                    order_by=(Message.created_at.desc(), Message.id.desc()),
                )
                .label("rn"),
            )
            .where(or_(Message.sender_uid == user_uid, Message.recipient_uid == user_uid))
            .subquery()
        )
        stmt = (
            select(Message, ranked.c.other_uid)
            .join(ranked, ranked.c.message_id == Message.id)
            .where(ranked.c.rn == 1)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return [(row[0], row[1]) for row in self.session.execute(stmt).all()]

    def mark_read_from(self, *, recipient_uid: str, sender_uid: str) -> int:
        """Flip unread messages from `sender_uid` to `recipient_uid`; return rows changed."""
        stmt = (
            update(Message)
            .where(
                Message.sender_uid == sender_uid,
                Message.recipient_uid == recipient_uid,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def count_unread(self, recipient_uid: str) -> int:
        """Return the number of unread messages addressed to `recipient_uid`."""
        stmt = select(func.count(Message.id)).where(
            Message.recipient_uid == recipient_uid,
            Message.is_read.is_(False),
        )
        return int(self.session.scalar(stmt) or 0)
