"""Domain exceptions raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
`HTTPException` themselves.
"""


class MarketError(RuntimeError):
    """Base exception for marketplace domain failures."""


class ValidationError(MarketError):
    """Raised when an operation receives missing or malformed input."""


class NotFoundError(MarketError):
    """Raised when a referenced user, service or request does not exist."""


class PermissionDeniedError(MarketError):
    """Raised when the caller may not act on the target resource."""
