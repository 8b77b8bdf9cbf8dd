"""Async HTTP client for the messaging and notification API.

Mirrors what a browser session does: it authenticates with a bearer token,
reads the derived views and resolves notification click-throughs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from campus_market.core.settings import settings
from campus_market.core.constants import (
    NOTIFICATION_MESSAGE_RECEIVED,
    NOTIFICATION_REQUEST_RECEIVED,
)

logger = logging.getLogger(__name__)

HTTP_FORBIDDEN = 403
HTTP_BAD_REQUEST = 400
API_PREFIX = "/api/v1"


class MarketplaceClientError(RuntimeError):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class AccountSuspendedError(MarketplaceClientError):
    """Raised when the API rejects the session because the account is suspended."""


class MarketplaceClient:
    """Thin async wrapper around the REST endpoints used by the chat UI."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = (
            settings.client_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=f"{self.base_url}{API_PREFIX}",
                    timeout=httpx.Timeout(self.timeout_seconds),
                    headers={"Authorization": f"Bearer {self.token}"},
                    transport=self._transport,
                )
            return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client = await self._ensure_client()
        response = await client.request(method, path, **kwargs)
        if response.status_code >= HTTP_BAD_REQUEST:
            try:
                detail = str(response.json().get("detail", response.text))
            except ValueError:
                detail = response.text
            if response.status_code == HTTP_FORBIDDEN and detail == "Account suspended":
                raise AccountSuspendedError(response.status_code, detail)
            raise MarketplaceClientError(response.status_code, detail)
        return response.json()

    async def send_message(self, recipient_uid: str, content: str) -> dict[str, Any]:
        """Send a message and return the stored row."""
        return await self._request(
            "POST",
            "/messages",
            json={"recipientUid": recipient_uid, "content": content},
        )

    async def fetch_thread(self, other_uid: str) -> list[dict[str, Any]]:
        """Return the thread with `other_uid`, oldest first."""
        return await self._request("GET", f"/messages/{other_uid}")

    async def fetch_conversations(self) -> list[dict[str, Any]]:
        """Return conversation summaries, most recent first."""
        return await self._request("GET", "/messages/conversations")

    async def unread_message_count(self) -> int:
        """Return the unread direct message badge count."""
        data = await self._request("GET", "/messages/unread-count")
        return int(data["count"])

    async def mark_thread_read(self, other_uid: str) -> int:
        """Mark messages from `other_uid` read; return the rows changed."""
        data = await self._request("PATCH", f"/messages/{other_uid}/read")
        return int(data.get("updated", 0))

    async def fetch_notifications(self) -> list[dict[str, Any]]:
        """Return the notification feed, newest first."""
        return await self._request("GET", "/notifications")

    async def unread_notification_count(self) -> int:
        """Return the unread notification count."""
        data = await self._request("GET", "/notifications/unread-count")
        return int(data["count"])

    async def mark_notification_read(self, notification_id: int) -> None:
        """Mark one notification read."""
        await self._request("PATCH", f"/notifications/{notification_id}/read")

    async def get_request(self, request_id: int | str) -> dict[str, Any]:
        """Return one service request."""
        return await self._request("GET", f"/requests/{request_id}")

    async def get_user(self, uid: str) -> dict[str, Any]:
        """Return the public identity of a user."""
        return await self._request("GET", f"/users/{uid}")

    async def resolve_notification_partner(
        self, notification: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Return the identity a click on `notification` should open a chat with.

        Message notifications carry the sender uid directly. Request
        notifications carry a request id, so the request is fetched first and
        its seeker is then looked up.
        """
        related_id = notification.get("related_id")
        if not related_id:
            return None
        if notification.get("type") == NOTIFICATION_MESSAGE_RECEIVED:
            return await self.get_user(str(related_id))
        if notification.get("type") == NOTIFICATION_REQUEST_RECEIVED:
            request = await self.get_request(related_id)
            return await self.get_user(request["seeker_uid"])
        logger.debug("No click-through for notification type %s", notification.get("type"))
        return None

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
