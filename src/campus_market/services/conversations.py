"""Per-counterpart conversation summaries derived from the message log."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from sqlalchemy.orm import Session

from campus_market.core.settings import settings
from campus_market.repositories.message_repo import MessageRepository
from campus_market.services.identity import resolve_identities


@dataclass(frozen=True)
class ConversationSummary:
    """Most recent message with one counterpart, as seen by one user."""

    other_uid: str
    other_name: str
    other_photo: str | None
    message_id: int
    content: str
    created_at: datetime
    is_read: bool
    sender_uid: str
    unread: bool


class ConversationSource(Protocol):
    """Anything able to produce a user's conversation list."""

    def list_conversations(self, user_uid: str) -> list[ConversationSummary]:
        ...


class RecomputingConversationSource:
    """Derives the conversation list from stored messages on every call."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = MessageRepository(db)

    def list_conversations(self, user_uid: str) -> list[ConversationSummary]:
        """Return one summary per counterpart, most recent activity first."""
        latest = self.repo.select_latest_by_participant(user_uid)
        identities = resolve_identities(self.db, (other_uid for _, other_uid in latest))

        summaries: list[ConversationSummary] = []
        for message, other_uid in latest:
            identity = identities.get(other_uid)
            summaries.append(
                ConversationSummary(
                    other_uid=other_uid,
                    other_name=(
                        identity.display_name
                        if identity is not None and identity.display_name
                        else settings.unknown_user_name
                    ),
                    other_photo=identity.avatar_ref if identity is not None else None,
                    message_id=message.id,
                    content=message.content,
                    created_at=message.created_at,
                    is_read=message.is_read,
                    sender_uid=message.sender_uid,
                    # Own outgoing messages never count as unread.
                    unread=message.sender_uid != user_uid and not message.is_read,
                )
            )
        return summaries


def list_conversations(
    db: Session,
    user_uid: str,
    source: ConversationSource | None = None,
) -> list[ConversationSummary]:
    """Return the conversation list for `user_uid`."""
    return (source or RecomputingConversationSource(db)).list_conversations(user_uid)
