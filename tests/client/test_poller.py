"""Tests for the polling views."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from campus_market.client import AccountSuspendedError, MarketplaceClientError, NavigationView, Poller, ThreadView


@pytest.mark.asyncio
async def test_tick_applies_fetched_state():
    on_update = MagicMock()
    poller = Poller(AsyncMock(return_value=[1, 2]), on_update, 1.0)

    assert await poller.tick() is True
    on_update.assert_called_once_with([1, 2])


@pytest.mark.asyncio
async def test_failed_tick_is_logged_and_state_kept(caplog):
    on_update = MagicMock()
    fetch = AsyncMock(side_effect=httpx.ConnectError("offline"))
    poller = Poller(fetch, on_update, 1.0, name="thread:uid-bob")

    assert await poller.tick() is False
    assert poller.failures == 1
    on_update.assert_not_called()
    assert "thread:uid-bob poll failed" in caplog.text


@pytest.mark.asyncio
async def test_poller_keeps_running_after_failures_and_stops_cleanly():
    calls = []

    async def fetch():
        calls.append(len(calls))
        if len(calls) == 1:
            raise MarketplaceClientError(500, "Internal error")
        return len(calls)

    updates = []
    poller = Poller(fetch, updates.append, 0.01)
    await poller.start()
    while len(updates) < 2:
        await asyncio.sleep(0.01)
    await poller.stop()

    assert poller.running is False
    assert poller.failures == 1
    count = len(calls)
    await asyncio.sleep(0.05)
    assert len(calls) == count


@pytest.mark.asyncio
async def test_poller_stops_when_account_suspended():
    fetch = AsyncMock(side_effect=AccountSuspendedError(403, "Account suspended"))
    poller = Poller(fetch, MagicMock(), 0.01)

    await poller.start()
    await asyncio.sleep(0.05)

    assert poller.running is False
    assert fetch.await_count == 1
    await poller.stop()


@pytest.mark.asyncio
async def test_thread_refresh_marks_unread_incoming_read():
    client = MagicMock()
    client.fetch_thread = AsyncMock(
        return_value=[
            {"id": 1, "sender_uid": "uid-bob", "is_read": False, "content": "hi"},
        ]
    )
    client.mark_thread_read = AsyncMock(return_value=1)
    view = ThreadView(client, "uid-bob")

    assert await view.poller.tick() is True
    client.mark_thread_read.assert_awaited_once_with("uid-bob")
    assert view.state.loaded is True
    assert [m["id"] for m in view.state.messages] == [1]


@pytest.mark.asyncio
async def test_thread_refresh_skips_mark_read_for_own_messages():
    client = MagicMock()
    client.fetch_thread = AsyncMock(
        return_value=[{"id": 1, "sender_uid": "uid-alice", "is_read": False, "content": "hi"}]
    )
    client.mark_thread_read = AsyncMock()
    view = ThreadView(client, "uid-bob")

    await view.poller.tick()
    client.mark_thread_read.assert_not_awaited()


@pytest.mark.asyncio
async def test_thread_send_keeps_draft_on_failure():
    client = MagicMock()
    client.send_message = AsyncMock(side_effect=MarketplaceClientError(500, "Internal error"))
    view = ThreadView(client, "uid-bob")

    with pytest.raises(MarketplaceClientError):
        await view.send("hello")
    assert view.state.draft == "hello"
    assert view.state.messages == []


@pytest.mark.asyncio
async def test_thread_send_appends_and_clears_draft():
    client = MagicMock()
    client.send_message = AsyncMock(return_value={"id": 9, "content": "hello"})
    view = ThreadView(client, "uid-bob")

    assert await view.send("hello") == {"id": 9, "content": "hello"}
    assert view.state.draft == ""
    assert view.state.messages == [{"id": 9, "content": "hello"}]
    assert await view.send("   ") is None
    client.send_message.assert_awaited_once()


@pytest.mark.asyncio
async def test_navigation_refresh_counts_unread():
    client = MagicMock()
    client.fetch_notifications = AsyncMock(
        return_value=[
            {"id": 2, "is_read": False, "type": "message_received", "related_id": "uid-alice"},
            {"id": 1, "is_read": True, "type": "message_received", "related_id": "uid-carol"},
        ]
    )
    client.unread_message_count = AsyncMock(return_value=5)
    view = NavigationView(client)

    await view.poller.tick()

    assert view.state.unread_notifications == 1
    assert view.state.unread_messages == 5
    assert len(view.state.notifications) == 2


@pytest.mark.asyncio
async def test_open_notification_marks_read_and_resolves_partner():
    notification = {"id": 2, "is_read": False, "type": "message_received", "related_id": "uid-alice"}
    client = MagicMock()
    client.mark_notification_read = AsyncMock()
    client.resolve_notification_partner = AsyncMock(return_value={"uid": "uid-alice"})
    view = NavigationView(client)
    view.state.notifications = [notification]
    view.state.unread_notifications = 1

    partner = await view.open_notification(notification)

    assert partner == {"uid": "uid-alice"}
    client.mark_notification_read.assert_awaited_once_with(2)
    assert view.state.unread_notifications == 0
    assert view.state.notifications[0]["is_read"] is True


def test_default_intervals_follow_settings():
    client = MagicMock()
    assert ThreadView(client, "uid-bob").poller.interval_seconds == 3.0
    assert NavigationView(client).poller.interval_seconds == 5.0


@pytest.mark.asyncio
async def test_tick_survives_update_errors(caplog):
    on_update = MagicMock(side_effect=KeyError("is_read"))
    poller = Poller(AsyncMock(return_value=[{}]), on_update, 1.0, name="navigation")

    assert await poller.tick() is False
    assert poller.failures == 1
    assert "navigation poll returned unusable data" in caplog.text


@pytest.mark.asyncio
async def test_navigation_keeps_polling_after_malformed_feed():
    client = MagicMock()
    client.fetch_notifications = AsyncMock(
        side_effect=[
            [{"id": 1, "type": "message_received", "related_id": "uid-alice"}],
            [{"id": 1, "is_read": False, "type": "message_received", "related_id": "uid-alice"}],
        ]
        + [[]] * 100
    )
    client.unread_message_count = AsyncMock(return_value=2)
    view = NavigationView(client, interval_seconds=0.01)

    await view.open()
    while client.fetch_notifications.await_count < 3:
        await asyncio.sleep(0.01)

    assert view.poller.running is True
    assert view.poller.failures == 1
    await view.close()
    assert view.poller.running is False
    assert view.state.unread_messages == 2


@pytest.mark.asyncio
async def test_unexpected_fetch_error_does_not_end_loop(caplog):
    calls = []

    async def fetch():
        calls.append(None)
        if len(calls) == 1:
            raise RuntimeError("unexpected")
        return len(calls)

    updates = []
    poller = Poller(fetch, updates.append, 0.01, name="thread:uid-bob")
    await poller.start()
    while not updates:
        await asyncio.sleep(0.01)
    await poller.stop()

    assert poller.failures == 1
    assert "thread:uid-bob poll crashed" in caplog.text
