"""User identity endpoints used to label conversations."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from campus_market.schemas.user import UserIdentityResponse
from campus_market.services.identity import resolve_identity

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{uid}", response_model=UserIdentityResponse)
async def get_user_identity(
    uid: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserIdentityResponse:
    """Return the public display name and avatar of a user."""
    identity = resolve_identity(db, uid)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserIdentityResponse.model_validate(identity)
