from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class BrandCreate(BaseModel):
    """Schema for creating a brand under a visible org"""

    org_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class BrandUpdate(BaseModel):
    """Schema for renaming a brand"""

    name: str = Field(..., min_length=1, max_length=255)


class BrandResponse(BaseModel):
    """Schema for brand response"""

    brand_id: UUID
    tenant_id: UUID
    org_id: UUID
    name: str
    slug: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BrandListResponse(BaseModel):
    """Schema for list of brands"""

    brands: list[BrandResponse]
    total: int
