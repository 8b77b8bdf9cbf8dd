"""Tests for the async marketplace API client."""

import json

import httpx
import pytest

from campus_market.client import AccountSuspendedError, MarketplaceClient, MarketplaceClientError


def _client(handler) -> MarketplaceClient:
    return MarketplaceClient(
        "http://market.test/",
        "token-123",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_send_message_posts_camel_case_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 1, "content": "Hi"})

    client = _client(handler)
    try:
        sent = await client.send_message("uid-bob", "Hi")
    finally:
        await client.close()

    assert sent["id"] == 1
    assert seen["url"] == "http://market.test/api/v1/messages"
    assert seen["auth"] == "Bearer token-123"
    assert seen["body"] == {"recipientUid": "uid-bob", "content": "Hi"}


@pytest.mark.asyncio
async def test_counters_and_mark_read():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/messages/unread-count":
            return httpx.Response(200, json={"count": 4})
        if request.url.path == "/api/v1/notifications/unread-count":
            return httpx.Response(200, json={"count": 2})
        if request.method == "PATCH" and request.url.path == "/api/v1/messages/uid-bob/read":
            return httpx.Response(200, json={"success": True, "updated": 3})
        return httpx.Response(404, json={"detail": "Not Found"})

    client = _client(handler)
    try:
        assert await client.unread_message_count() == 4
        assert await client.unread_notification_count() == 2
        assert await client.mark_thread_read("uid-bob") == 3
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_error_status_raises_client_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Recipient not found"})

    client = _client(handler)
    try:
        with pytest.raises(MarketplaceClientError) as exc_info:
            await client.send_message("uid-ghost", "Hi")
    finally:
        await client.close()

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Recipient not found"


@pytest.mark.asyncio
async def test_suspended_account_is_distinguished():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"detail": "Account suspended"})

    client = _client(handler)
    try:
        with pytest.raises(AccountSuspendedError):
            await client.fetch_notifications()
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_resolve_message_notification_partner():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200, json={"uid": "uid-alice", "display_name": "Alice", "avatar_ref": None})

    client = _client(handler)
    try:
        partner = await client.resolve_notification_partner(
            {"type": "message_received", "related_id": "uid-alice"}
        )
    finally:
        await client.close()

    assert partner["display_name"] == "Alice"
    assert requested == ["/api/v1/users/uid-alice"]


@pytest.mark.asyncio
async def test_resolve_request_notification_partner_takes_two_hops():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        if request.url.path == "/api/v1/requests/7":
            return httpx.Response(200, json={"id": 7, "seeker_uid": "uid-alice"})
        return httpx.Response(200, json={"uid": "uid-alice", "display_name": "Alice", "avatar_ref": None})

    client = _client(handler)
    try:
        partner = await client.resolve_notification_partner(
            {"type": "request_received", "related_id": "7"}
        )
    finally:
        await client.close()

    assert partner["uid"] == "uid-alice"
    assert requested == ["/api/v1/requests/7", "/api/v1/users/uid-alice"]


@pytest.mark.asyncio
async def test_unknown_notification_type_has_no_partner():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not be called
        raise AssertionError("no request expected")

    client = _client(handler)
    try:
        assert await client.resolve_notification_partner({"type": "other", "related_id": "x"}) is None
        assert await client.resolve_notification_partner({"type": "message_received"}) is None
    finally:
        await client.close()
