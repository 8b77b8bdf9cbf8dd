"""Service request Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from campus_market.db.time import as_utc


class ServiceRequestCreate(BaseModel):
    """Schema for creating a service request."""

    service_id: int | None = Field(None, alias="serviceId", description="Requested service listing")
    provider_uid: str = Field(..., alias="providerUid", min_length=1, description="Uid of the provider")
    message: str | None = Field(None, description="Free-text inquiry, mirrored into the chat")
    seeker_email: str | None = Field(None, alias="seekerEmail")
    status: str | None = Field(None, description="Initial status; defaults to pending")

    model_config = ConfigDict(populate_by_name=True)


class ServiceRequestCreated(BaseModel):
    """Acknowledgement returned after a request is stored."""

    success: bool = True
    id: int


class ServiceRequestResponse(BaseModel):
    """Schema for a stored service request."""

    id: int
    service_id: int | None
    seeker_uid: str
    seeker_name: str | None
    seeker_email: str | None
    provider_uid: str
    message: str | None
    status: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """Render timestamps as UTC ISO-8601."""
        return as_utc(value).isoformat()

    model_config = ConfigDict(from_attributes=True)
