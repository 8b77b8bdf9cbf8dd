"""Service requests and the chat message and notification they trigger."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from campus_market.core.constants import NOTIFICATION_REQUEST_RECEIVED, REQUEST_MESSAGE_PREFIX
from campus_market.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from campus_market.core.settings import settings
from campus_market.models.request import REQUEST_STATUS_PENDING, ServiceRequest
from campus_market.repositories.message_repo import MessageRepository
from campus_market.repositories.request_repo import RequestRepository
from campus_market.services.identity import display_name_or, get_user
from campus_market.services.notifications import NotificationEmitter

__all__ = ["create_request", "get_request", "get_request_for"]

logger = logging.getLogger(__name__)


def create_request(
    db: Session,
    seeker_uid: str,
    *,
    provider_uid: str,
    message: str | None,
    service_id: int | None = None,
    seeker_email: str | None = None,
    status: str | None = None,
    emitter: NotificationEmitter | None = None,
) -> ServiceRequest:
    """Create a service request on behalf of `seeker_uid`.

    The request row and, when `message` has text, a chat message from the
    seeker to the provider are committed together. The provider's
    `request_received` notification is emitted afterwards on a best-effort
    basis.

    Raises:
        ValidationError: If no provider is given.
        NotFoundError: If the provider or the referenced service is missing.
    """
    if not provider_uid:
        raise ValidationError("Provider is required")
    if get_user(db, provider_uid) is None:
        raise NotFoundError("Provider not found")

    requests = RequestRepository(db)
    if service_id is not None and not requests.service_exists(service_id):
        raise NotFoundError("Service not found")

    seeker_name = display_name_or(db, seeker_uid, settings.sender_fallback_name)
    logger.info("Creating request from %s (%s) to %s", seeker_uid, seeker_name, provider_uid)

    request = requests.insert(
        service_id=service_id,
        seeker_uid=seeker_uid,
        seeker_name=seeker_name,
        seeker_email=seeker_email,
        provider_uid=provider_uid,
        message=message,
        status=status or REQUEST_STATUS_PENDING,
    )
    if message:
        MessageRepository(db).insert(
            sender_uid=seeker_uid,
            recipient_uid=provider_uid,
            content=f"{REQUEST_MESSAGE_PREFIX}{message}",
        )
    db.commit()
    db.refresh(request)

    (emitter or NotificationEmitter(db)).emit(
        provider_uid,
        f"New request from {seeker_name}",
        str(request.id),
        NOTIFICATION_REQUEST_RECEIVED,
    )
    return request


def get_request(db: Session, request_id: int) -> ServiceRequest:
    """Return a request by id.

    Raises:
        NotFoundError: If no such request exists.
    """
    request = RequestRepository(db).get_by_id(request_id)
    if request is None:
        raise NotFoundError("Request not found")
    return request


def get_request_for(db: Session, request_id: int, viewer_uid: str, *, is_admin: bool = False) -> ServiceRequest:
    """Return a request the viewer is a party to.

    Raises:
        NotFoundError: If no such request exists.
        PermissionDeniedError: If the viewer is neither seeker nor provider.
    """
    request = get_request(db, request_id)
    if not is_admin and viewer_uid not in (request.seeker_uid, request.provider_uid):
        raise PermissionDeniedError("Not permitted")
    return request
