from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class LocationCreate(BaseModel):
    """Schema for creating a location; org_id is taken from the brand"""

    brand_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    timezone: str | None = Field(None, max_length=64)


class LocationUpdate(BaseModel):
    """Schema for updating a location"""

    name: str | None = Field(None, min_length=1, max_length=255)
    timezone: str | None = Field(None, max_length=64)


class LocationResponse(BaseModel):
    """Schema for location response"""

    location_id: UUID
    tenant_id: UUID
    org_id: UUID
    brand_id: UUID
    name: str
    timezone: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LocationListResponse(BaseModel):
    """Schema for list of locations"""

    locations: list[LocationResponse]
    total: int
