from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ucom.dependencies import get_tenant_context, get_tenant_db
from ucom.models.tenant_context import TenantContext
from ucom.services.brand_service import BrandService
from ucom.schemas.brand_schemas import (
    BrandCreate,
    BrandUpdate,
    BrandResponse,
    BrandListResponse,
)

router = APIRouter()


@router.post("", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
async def create_brand(
    data: BrandCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_tenant_db),
):
    """
    Create a brand under an org.

    - The org must belong to the caller's tenant (404 otherwise)
    """
    service = BrandService(db)
    return service.create_brand(data, context)


@router.get("", response_model=BrandListResponse)
async def list_brands(
    org_id: UUID | None = Query(None, description="Only brands of this org"),
    db: Session = Depends(get_tenant_db),
):
    """Get brands of the caller's tenant"""
    service = BrandService(db)
    brands = service.list_brands(org_id)
    return BrandListResponse(brands=brands, total=len(brands))


@router.get("/{brand_id}", response_model=BrandResponse)
async def get_brand(brand_id: UUID, db: Session = Depends(get_tenant_db)):
    """Get specific brand details"""
    service = BrandService(db)
    return service.get_brand(brand_id)


@router.patch("/{brand_id}", response_model=BrandResponse)
async def update_brand(brand_id: UUID, data: BrandUpdate, db: Session = Depends(get_tenant_db)):
    """Rename a brand"""
    service = BrandService(db)
    return service.rename_brand(brand_id, data)


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_brand(brand_id: UUID, db: Session = Depends(get_tenant_db)):
    """Delete brand and its locations"""
    service = BrandService(db)
    service.delete_brand(brand_id)
    return None
