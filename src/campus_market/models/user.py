"""SQLAlchemy model for campus marketplace users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"


class User(Base):
    """Campus member identity.

    Owned by the identity subsystem; the messaging core only reads the
    display name, avatar and suspension flag.
    """

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=ROLE_STUDENT)
    is_blacklisted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    @property
    def is_admin(self) -> bool:
        """Return True when the user holds the admin role."""
        return self.role == ROLE_ADMIN
