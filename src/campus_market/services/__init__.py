"""Business logic services for the Campus Market application."""

from .conversations import ConversationSource, ConversationSummary, RecomputingConversationSource
from .identity import Identity
from .notifications import NotificationEmitter, NotificationFeed

__all__ = [
    "ConversationSource",
    "ConversationSummary",
    "RecomputingConversationSource",
    "Identity",
    "NotificationEmitter",
    "NotificationFeed",
]
