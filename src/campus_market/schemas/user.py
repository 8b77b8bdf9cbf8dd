"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserIdentityResponse(BaseModel):
    """Public identity used to label conversations."""

    uid: str
    display_name: str | None = Field(None, description="Human-readable name")
    avatar_ref: str | None = Field(None, description="Avatar URL or storage reference")

    model_config = ConfigDict(from_attributes=True)
