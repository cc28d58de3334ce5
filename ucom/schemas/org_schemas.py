from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class OrgCreate(BaseModel):
    """Schema for creating an org (tenant comes from the token, never the body)"""

    name: str = Field(..., min_length=1, max_length=255)


class OrgUpdate(BaseModel):
    """Schema for renaming an org"""

    name: str = Field(..., min_length=1, max_length=255)


class OrgResponse(BaseModel):
    """Schema for org response"""

    org_id: UUID
    tenant_id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrgListResponse(BaseModel):
    """Schema for list of orgs"""

    orgs: list[OrgResponse]
    total: int
