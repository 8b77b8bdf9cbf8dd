"""Service request model."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow

REQUEST_STATUS_PENDING = "pending"


class ServiceRequest(Base):
    """Inquiry from a seeker to the provider of a service."""

    __tablename__ = "requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("services.id"), nullable=True)
    seeker_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)
    # Name and email are captured at request time, not joined later.
    seeker_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    seeker_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=REQUEST_STATUS_PENDING)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
