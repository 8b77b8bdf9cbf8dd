"""Polling API client used by interactive sessions and integration scripts."""

from .api import AccountSuspendedError, MarketplaceClient, MarketplaceClientError
from .poller import NavigationView, Poller, ThreadView

__all__ = [
    "AccountSuspendedError",
    "MarketplaceClient",
    "MarketplaceClientError",
    "NavigationView",
    "Poller",
    "ThreadView",
]
