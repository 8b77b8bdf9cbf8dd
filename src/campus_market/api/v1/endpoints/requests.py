"""Service request endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from campus_market.core.errors import MarketError
from campus_market.schemas.request import (
    ServiceRequestCreate,
    ServiceRequestCreated,
    ServiceRequestResponse,
)
from campus_market.services import requests as request_service

from ..dependencies import CurrentUserDep, SessionDep, to_http_error

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("", response_model=ServiceRequestCreated)
async def create_request(
    request_data: ServiceRequestCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ServiceRequestCreated:
    """Create a service request, mirror it into the chat and notify the provider."""
    try:
        request = request_service.create_request(
            db,
            current_user.uid,
            provider_uid=request_data.provider_uid,
            message=request_data.message,
            service_id=request_data.service_id,
            seeker_email=request_data.seeker_email or current_user.email,
            status=request_data.status,
        )
    except MarketError as exc:
        raise to_http_error(exc) from exc
    return ServiceRequestCreated(id=request.id)


@router.get("/{request_id}", response_model=ServiceRequestResponse)
async def get_request(
    request_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ServiceRequestResponse:
    """Fetch one request; only its seeker, its provider or an admin may read it."""
    try:
        request = request_service.get_request_for(
            db,
            request_id,
            current_user.uid,
            is_admin=current_user.is_admin,
        )
    except MarketError as exc:
        raise to_http_error(exc) from exc
    return ServiceRequestResponse.model_validate(request)
