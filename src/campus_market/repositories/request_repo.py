"""Data access helpers for service requests."""
from __future__ import annotations

from sqlalchemy.orm import Session

from campus_market.models.request import REQUEST_STATUS_PENDING, ServiceRequest
from campus_market.models.service import Service

__all__ = ["RequestRepository"]


class RequestRepository:
    """Thin wrapper around database access for service requests."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(
        self,
        *,
        service_id: int | None,
        seeker_uid: str,
        seeker_name: str,
        seeker_email: str | None,
        provider_uid: str,
        message: str | None,
        status: str = REQUEST_STATUS_PENDING,
    ) -> ServiceRequest:
        """Insert a request row and flush it so its id is available."""
        request = ServiceRequest(
            service_id=service_id,
            seeker_uid=seeker_uid,
            seeker_name=seeker_name,
            seeker_email=seeker_email,
            provider_uid=provider_uid,
            message=message,
            status=status,
        )
        self.session.add(request)
        self.session.flush()
        return request

    def get_by_id(self, request_id: int) -> ServiceRequest | None:
        """Return a request by identifier."""
        return self.session.get(ServiceRequest, request_id)

    def service_exists(self, service_id: int) -> bool:
        """Return True when a service listing with this id exists."""
        return self.session.get(Service, service_id) is not None
