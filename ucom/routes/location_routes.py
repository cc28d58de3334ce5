from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ucom.dependencies import get_tenant_context, get_tenant_db
from ucom.models.tenant_context import TenantContext
from ucom.services.location_service import LocationService
from ucom.schemas.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationResponse,
    LocationListResponse,
)

router = APIRouter()


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    data: LocationCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_tenant_db),
):
    """
    Create a location under a brand.

    - The brand must belong to the caller's tenant (404 otherwise)
    - org_id is copied from the brand
    """
    service = LocationService(db)
    return service.create_location(data, context)


@router.get("", response_model=LocationListResponse)
async def list_locations(
    brand_id: UUID | None = Query(None, description="Only locations of this brand"),
    db: Session = Depends(get_tenant_db),
):
    """Get locations of the caller's tenant"""
    service = LocationService(db)
    locations = service.list_locations(brand_id)
    return LocationListResponse(locations=locations, total=len(locations))


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(location_id: UUID, db: Session = Depends(get_tenant_db)):
    """Get specific location details"""
    service = LocationService(db)
    return service.get_location(location_id)


@router.patch("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: UUID, data: LocationUpdate, db: Session = Depends(get_tenant_db)
):
    """Update location name or timezone"""
    service = LocationService(db)
    return service.update_location(location_id, data)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(location_id: UUID, db: Session = Depends(get_tenant_db)):
    """Delete a location"""
    service = LocationService(db)
    service.delete_location(location_id)
    return None
