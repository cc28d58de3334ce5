from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ucom.dependencies import get_tenant_context, get_tenant_db
from ucom.models.tenant_context import TenantContext
from ucom.services.org_service import OrgService
from ucom.schemas.org_schemas import (
    OrgCreate,
    OrgUpdate,
    OrgResponse,
    OrgListResponse,
)

router = APIRouter()


@router.post("", response_model=OrgResponse, status_code=status.HTTP_201_CREATED)
async def create_org(
    data: OrgCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_tenant_db),
):
    """Create a new org for the caller's tenant"""
    service = OrgService(db)
    return service.create_org(data, context)


@router.get("", response_model=OrgListResponse)
async def list_orgs(db: Session = Depends(get_tenant_db)):
    """Get all orgs of the caller's tenant"""
    service = OrgService(db)
    orgs = service.list_orgs()
    return OrgListResponse(orgs=orgs, total=len(orgs))


@router.get("/{org_id}", response_model=OrgResponse)
async def get_org(org_id: UUID, db: Session = Depends(get_tenant_db)):
    """Get specific org details"""
    service = OrgService(db)
    return service.get_org(org_id)


@router.patch("/{org_id}", response_model=OrgResponse)
async def update_org(org_id: UUID, data: OrgUpdate, db: Session = Depends(get_tenant_db)):
    """Rename an org"""
    service = OrgService(db)
    return service.rename_org(org_id, data)


@router.delete("/{org_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_org(org_id: UUID, db: Session = Depends(get_tenant_db)):
    """Delete org and all of its brands and locations"""
    service = OrgService(db)
    service.delete_org(org_id)
    return None
