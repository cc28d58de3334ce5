from uuid import UUID

from sqlalchemy.orm import Session

from ucom.core.exceptions import NotFoundException, ValidationException
from ucom.models.location import Location
from ucom.models.tenant_context import TenantContext
from ucom.repositories.brand_repository import BrandRepository
from ucom.repositories.location_repository import LocationRepository
from ucom.schemas.location_schemas import LocationCreate, LocationUpdate


class LocationService:
    """Service for location business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LocationRepository(db)
        self.brand_repo = BrandRepository(db)

    def create_location(self, data: LocationCreate, context: TenantContext) -> Location:
        """
        Create a location under a brand of the caller's tenant.

        The org is taken from the brand row itself, so the stored
        (tenant_id, org_id, brand_id) triple always names one real brand.

        Raises:
            NotFoundException: If the brand is not visible to the tenant
        """
        brand = self.brand_repo.get_by_id(data.brand_id)
        if not brand:
            raise NotFoundException(f"Brand {data.brand_id} not found")

        location = Location(
            tenant_id=context.tenant_id,
            org_id=brand.org_id,
            brand_id=brand.brand_id,
            name=data.name,
            timezone=data.timezone,
        )
        return self.repo.create(location)

    def list_locations(self, brand_id: UUID | None = None) -> list[Location]:
        """List visible locations"""
        return self.repo.get_all(brand_id)

    def get_location(self, location_id: UUID) -> Location:
        """
        Get location by ID.

        Raises:
            NotFoundException: If location not found or owned by another tenant
        """
        location = self.repo.get_by_id(location_id)
        if not location:
            raise NotFoundException("Location not found")
        return location

    def update_location(self, location_id: UUID, data: LocationUpdate) -> Location:
        """Update location name and/or timezone"""
        values = data.model_dump(exclude_unset=True)
        if not values:
            raise ValidationException("No fields to update")
        if "name" in values and values["name"] is None:
            raise ValidationException("Location name cannot be null")

        if self.repo.update(location_id, **values) == 0:
            raise NotFoundException("Location not found")
        return self.get_location(location_id)

    def delete_location(self, location_id: UUID) -> None:
        """Delete location"""
        location = self.get_location(location_id)
        self.repo.delete(location)
