from uuid import UUID

from sqlalchemy.orm import Session

from ucom.core.exceptions import NotFoundException
from ucom.models.brand import Brand
from ucom.models.tenant_context import TenantContext
from ucom.repositories.brand_repository import BrandRepository
from ucom.repositories.org_repository import OrgRepository
from ucom.schemas.brand_schemas import BrandCreate, BrandUpdate


class BrandService:
    """Service for brand business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BrandRepository(db)
        self.org_repo = OrgRepository(db)

    def create_brand(self, data: BrandCreate, context: TenantContext) -> Brand:
        """
        Create a brand under an org of the caller's tenant.

        Raises:
            NotFoundException: If the org is not visible to the tenant
        """
        if not self.org_repo.get_by_id(data.org_id):
            raise NotFoundException(f"Org {data.org_id} not found")

        brand = Brand(
            tenant_id=context.tenant_id,
            org_id=data.org_id,
            name=data.name,
            slug=data.slug,
        )
        return self.repo.create(brand)

    def list_brands(self, org_id: UUID | None = None) -> list[Brand]:
        """List visible brands"""
        return self.repo.get_all(org_id)

    def get_brand(self, brand_id: UUID) -> Brand:
        """
        Get brand by ID.

        Raises:
            NotFoundException: If brand not found or owned by another tenant
        """
        brand = self.repo.get_by_id(brand_id)
        if not brand:
            raise NotFoundException("Brand not found")
        return brand

    def rename_brand(self, brand_id: UUID, data: BrandUpdate) -> Brand:
        """Rename brand"""
        if self.repo.update_name(brand_id, data.name) == 0:
            raise NotFoundException("Brand not found")
        return self.get_brand(brand_id)

    def delete_brand(self, brand_id: UUID) -> None:
        """Delete brand and its locations (cascade)"""
        brand = self.get_brand(brand_id)
        self.repo.delete(brand)
