"""Tests for the conversation list derived from the message log."""

from datetime import UTC, datetime, timedelta

from campus_market.models import Message
from campus_market.services.conversations import (
    ConversationSummary,
    RecomputingConversationSource,
    list_conversations,
)

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _add_message(db_session, sender_uid, recipient_uid, content, minutes, *, is_read=False):
    message = Message(
        sender_uid=sender_uid,
        recipient_uid=recipient_uid,
        content=content,
        is_read=is_read,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db_session.add(message)
    db_session.flush()
    return message


def test_empty_history_yields_no_conversations(db_session, alice):
    assert list_conversations(db_session, alice.uid) == []


def test_one_summary_per_counterpart_with_latest_message(db_session, alice, bob, carol):
    _add_message(db_session, alice.uid, bob.uid, "old", 1)
    latest_bob = _add_message(db_session, bob.uid, alice.uid, "newest with bob", 5)
    latest_carol = _add_message(db_session, alice.uid, carol.uid, "hi carol", 3)

    summaries = list_conversations(db_session, alice.uid)

    assert [s.other_uid for s in summaries] == [bob.uid, carol.uid]
    assert [s.message_id for s in summaries] == [latest_bob.id, latest_carol.id]
    assert summaries[0].content == "newest with bob"


def test_summary_carries_counterpart_identity(db_session, alice, bob):
    _add_message(db_session, bob.uid, alice.uid, "hello", 1)

    (summary,) = list_conversations(db_session, alice.uid)

    assert isinstance(summary, ConversationSummary)
    assert summary.other_name == "Bob"
    assert summary.other_photo == "https://cdn.test/bob.png"
    assert summary.sender_uid == bob.uid


def test_unknown_counterpart_gets_placeholder_name(db_session, alice, nameless):
    _add_message(db_session, nameless.uid, alice.uid, "who am i", 1)

    (summary,) = list_conversations(db_session, alice.uid)
    assert summary.other_name == "Unknown User"
    assert summary.other_photo is None


def test_unread_flag_only_for_incoming_latest_message(db_session, alice, bob, carol):
    _add_message(db_session, bob.uid, alice.uid, "unread incoming", 1)
    _add_message(db_session, alice.uid, carol.uid, "unread outgoing", 2)

    by_uid = {s.other_uid: s for s in list_conversations(db_session, alice.uid)}

    assert by_uid[bob.uid].unread is True
    assert by_uid[carol.uid].is_read is False
    assert by_uid[carol.uid].unread is False


def test_same_timestamp_tie_broken_by_message_id(db_session, alice, bob):
    _add_message(db_session, alice.uid, bob.uid, "first", 2)
    second = _add_message(db_session, bob.uid, alice.uid, "second", 2)

    (summary,) = list_conversations(db_session, alice.uid)
    assert summary.message_id == second.id


def test_self_conversation_appears_once(db_session, alice, bob):
    _add_message(db_session, alice.uid, alice.uid, "memo", 1)
    _add_message(db_session, alice.uid, bob.uid, "hi", 2)

    summaries = list_conversations(db_session, alice.uid)
    assert [s.other_uid for s in summaries] == [bob.uid, alice.uid]
    self_row = summaries[1]
    assert self_row.sender_uid == alice.uid
    assert self_row.is_read is False
    # A memo to oneself is outgoing, so it never counts as unread.
    assert self_row.unread is False


def test_conversations_are_per_viewer(db_session, alice, bob, carol):
    _add_message(db_session, alice.uid, bob.uid, "a->b", 1)
    _add_message(db_session, carol.uid, bob.uid, "c->b", 2)

    assert [s.other_uid for s in list_conversations(db_session, bob.uid)] == [carol.uid, alice.uid]
    assert [s.other_uid for s in list_conversations(db_session, alice.uid)] == [bob.uid]


def test_custom_source_is_used(db_session, alice):
    class StaticSource:
        def list_conversations(self, user_uid):
            return ["sentinel", user_uid]

    assert list_conversations(db_session, alice.uid, source=StaticSource()) == ["sentinel", alice.uid]


def test_recomputing_source_matches_helper(db_session, alice, bob):
    _add_message(db_session, alice.uid, bob.uid, "hi", 1)
    source = RecomputingConversationSource(db_session)
    assert source.list_conversations(alice.uid) == list_conversations(db_session, alice.uid)
