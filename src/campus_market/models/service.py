"""Service listing rows referenced by service requests."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow

SERVICE_STATUS_PENDING = "pending"


class Service(Base):
    """A listing posted by a provider.

    Listing management lives outside the messaging core; requests only need
    the row to exist.
    """

    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    provider_uid: Mapped[str] = mapped_column(String(255), ForeignKey("users.uid"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=SERVICE_STATUS_PENDING)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
