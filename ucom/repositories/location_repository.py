from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from ucom.db.rls import commit
from ucom.models.location import Location


class LocationRepository:
    """Repository for Location model operations (visibility enforced by row level security)"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, brand_id: UUID | None = None) -> list[Location]:
        """Get visible locations, optionally for one brand"""
        query = self.db.query(Location)
        if brand_id is not None:
            query = query.filter(Location.brand_id == brand_id)
        return query.order_by(Location.name, Location.location_id).all()

    def get_by_id(self, location_id: UUID) -> Location | None:
        """Get location by ID; None if missing or owned by another tenant"""
        return self.db.query(Location).filter(Location.location_id == location_id).first()

    def create(self, location: Location) -> Location:
        """
        Create new location.

        Raises:
            LineageViolationError: If (tenant_id, org_id, brand_id) matches no brand
        """
        self.db.add(location)
        commit(self.db)
        self.db.refresh(location)
        return location

    def update(self, location_id: UUID, **values) -> int:
        """Update name/timezone; returns affected rows (0 when not visible)"""
        result = self.db.execute(
            update(Location).where(Location.location_id == location_id).values(**values)
        )
        commit(self.db)
        return result.rowcount

    def delete(self, location: Location) -> None:
        """Delete location"""
        self.db.delete(location)
        commit(self.db)
