"""Identity lookups used to make messages and notifications human-readable."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_market.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Public identity of a user as shown next to messages."""

    uid: str
    display_name: str | None
    avatar_ref: str | None


def _to_identity(user: User) -> Identity:
    return Identity(uid=user.uid, display_name=user.display_name, avatar_ref=user.photo_url)


def get_user(db: Session, uid: str) -> User | None:
    """Return a single user by uid."""
    return db.get(User, uid)


def resolve_identity(db: Session, uid: str) -> Identity | None:
    """Return the display name and avatar for `uid`, or None when unknown."""
    user = get_user(db, uid)
    if user is None:
        return None
    return _to_identity(user)


def resolve_identities(db: Session, uids: Iterable[str]) -> dict[str, Identity]:
    """Resolve many users with a single query; unknown uids are omitted."""
    wanted = set(uids)
    if not wanted:
        return {}
    users = db.scalars(select(User).where(User.uid.in_(wanted)))
    return {user.uid: _to_identity(user) for user in users}


def display_name_or(db: Session, uid: str, fallback: str) -> str:
    """Return the user's display name, substituting `fallback` on a lookup miss."""
    identity = resolve_identity(db, uid)
    if identity is None or not identity.display_name:
        logger.warning("Display name not found for uid %s; using %r", uid, fallback)
        return fallback
    return identity.display_name


def is_suspended(db: Session, uid: str) -> bool:
    """Return True when the user exists and is blacklisted."""
    user = get_user(db, uid)
    return bool(user is not None and user.is_blacklisted)
