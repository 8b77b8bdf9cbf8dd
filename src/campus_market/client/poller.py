"""Fixed-interval polling that keeps client-side views fresh.

Each active view owns one `Poller`. Every tick re-fetches the view's data
and replaces local state wholesale; nothing is diffed and nothing is pushed
by the server. A failed tick is logged and the next tick simply tries again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from campus_market.core.settings import settings

from .api import AccountSuspendedError, MarketplaceClient, MarketplaceClientError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Poller(Generic[T]):
    """Runs `fetch` every `interval_seconds` and hands the result to `on_update`."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        on_update: Callable[[T], None],
        interval_seconds: float,
        *,
        name: str = "poller",
    ) -> None:
        self.fetch = fetch
        self.on_update = on_update
        self.interval_seconds = max(0.01, float(interval_seconds))
        self.name = name
        self.failures = 0
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        """Return True while the polling task is alive."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start polling; the first fetch happens immediately."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run(), name=self.name)

    async def stop(self) -> None:
        """Stop polling and wait for the task to finish, leaving no timer behind."""
        if self._task is None:
            return

        self._stopping.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def tick(self) -> bool:
        """Fetch once and apply the result; return False if the iteration failed."""
        try:
            result = await self.fetch()
            self.on_update(result)
        except AccountSuspendedError:
            raise
        except (MarketplaceClientError, httpx.HTTPError, OSError) as e:
            self.failures += 1
            logger.warning("%s poll failed: %s", self.name, e)
            return False
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            self.failures += 1
            logger.error("%s poll returned unusable data: %s", self.name, e, exc_info=True)
            return False
        return True

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.tick()
            except AccountSuspendedError:
                logger.warning("%s stopped: account suspended", self.name)
                return
            except Exception:
                # Keep polling; the next tick replaces local state wholesale.
                self.failures += 1
                logger.exception("%s poll crashed", self.name)
            await asyncio.sleep(self.interval_seconds)


@dataclass
class ThreadState:
    """What an open chat window shows."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    loaded: bool = False
    draft: str = ""


class ThreadView:
    """Chat window with one counterpart, refreshed every few seconds."""

    def __init__(
        self,
        client: MarketplaceClient,
        other_uid: str,
        *,
        interval_seconds: float | None = None,
    ) -> None:
        self.client = client
        self.other_uid = other_uid
        self.state = ThreadState()
        self.poller: Poller[list[dict[str, Any]]] = Poller(
            self.refresh,
            self._apply,
            settings.message_poll_interval_seconds if interval_seconds is None else interval_seconds,
            name=f"thread:{other_uid}",
        )

    async def refresh(self) -> list[dict[str, Any]]:
        """Fetch the thread and mark it read when the counterpart has unread messages."""
        messages = await self.client.fetch_thread(self.other_uid)
        has_unread = any(
            not message["is_read"] and message["sender_uid"] == self.other_uid
            for message in messages
        )
        if has_unread:
            await self.client.mark_thread_read(self.other_uid)
        return messages

    def _apply(self, messages: list[dict[str, Any]]) -> None:
        self.state.messages = messages
        self.state.loaded = True

    async def send(self, content: str) -> dict[str, Any] | None:
        """Send `content`; on failure the draft is kept so the user can retry.

        Returns None without calling the API when the draft is blank.
        """
        self.state.draft = content
        if not content.strip():
            return None
        sent = await self.client.send_message(self.other_uid, content)
        self.state.messages = [*self.state.messages, sent]
        self.state.draft = ""
        return sent

    async def open(self) -> None:
        await self.poller.start()

    async def close(self) -> None:
        await self.poller.stop()


@dataclass
class NavigationState:
    """Badge and bell data shown in the navigation bar."""

    notifications: list[dict[str, Any]] = field(default_factory=list)
    unread_notifications: int = 0
    unread_messages: int = 0


class NavigationView:
    """Navigation bar counters and notification dropdown."""

    def __init__(
        self,
        client: MarketplaceClient,
        *,
        interval_seconds: float | None = None,
    ) -> None:
        self.client = client
        self.state = NavigationState()
        self.poller: Poller[tuple[list[dict[str, Any]], int]] = Poller(
            self.refresh,
            self._apply,
            settings.nav_poll_interval_seconds if interval_seconds is None else interval_seconds,
            name="navigation",
        )

    async def refresh(self) -> tuple[list[dict[str, Any]], int]:
        """Fetch the notification feed and the unread message count."""
        notifications = await self.client.fetch_notifications()
        unread_messages = await self.client.unread_message_count()
        return notifications, unread_messages

    def _apply(self, result: tuple[list[dict[str, Any]], int]) -> None:
        notifications, unread_messages = result
        self.state.notifications = notifications
        self.state.unread_notifications = sum(1 for n in notifications if not n["is_read"])
        self.state.unread_messages = unread_messages

    async def open_notification(self, notification: dict[str, Any]) -> dict[str, Any] | None:
        """Mark a notification read and return the user to open a chat with.

        Marking the notification read does not touch the underlying messages;
        those are marked read once the chat window loads them.
        """
        if not notification["is_read"]:
            await self.client.mark_notification_read(notification["id"])
            self.state.notifications = [
                {**n, "is_read": True} if n["id"] == notification["id"] else n
                for n in self.state.notifications
            ]
            self.state.unread_notifications = max(0, self.state.unread_notifications - 1)
        return await self.client.resolve_notification_partner(notification)

    async def open(self) -> None:
        await self.poller.start()

    async def close(self) -> None:
        await self.poller.stop()
