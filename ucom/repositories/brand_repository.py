from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from ucom.db.rls import commit
from ucom.models.brand import Brand


class BrandRepository:
    """Repository for Brand model operations (visibility enforced by row level security)"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, org_id: UUID | None = None) -> list[Brand]:
        """Get visible brands, optionally for one org"""
        query = self.db.query(Brand)
        if org_id is not None:
            query = query.filter(Brand.org_id == org_id)
        return query.order_by(Brand.name, Brand.brand_id).all()

    def get_by_id(self, brand_id: UUID) -> Brand | None:
        """Get brand by ID; None if missing or owned by another tenant"""
        return self.db.query(Brand).filter(Brand.brand_id == brand_id).first()

    def create(self, brand: Brand) -> Brand:
        """
        Create new brand.

        Raises:
            TenantIsolationError: If brand.tenant_id is not the session's tenant
            LineageViolationError: If (tenant_id, org_id) matches no org
            ConflictException: If the slug is already used within the tenant
        """
        self.db.add(brand)
        commit(self.db)
        self.db.refresh(brand)
        return brand

    def update_name(self, brand_id: UUID, name: str) -> int:
        """Rename brand; returns affected rows (0 when not visible)"""
        result = self.db.execute(
            update(Brand).where(Brand.brand_id == brand_id).values(name=name)
        )
        commit(self.db)
        return result.rowcount

    def delete(self, brand: Brand) -> None:
        """Delete brand (cascades to locations)"""
        self.db.delete(brand)
        commit(self.db)
