"""Bearer token helpers built on python-jose.

Token issuance belongs to the identity subsystem; these helpers only cover
what the messaging API needs to authenticate a caller.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from campus_market.core.settings import settings


def create_access_token(
    uid: str,
    *,
    role: str = "student",
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a signed JWT whose subject is the user's uid."""
    to_encode: dict[str, object] = {"sub": uid, "role": role}
    if email is not None:
        to_encode["email"] = email
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> str:
    """Return the `sub` claim of a valid token.

    Raises:
        JWTError: If the token is malformed, expired or carries no subject.
    """
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    subject = payload.get("sub")
    if not subject:
        raise JWTError("Token has no subject")
    return str(subject)
