from uuid import UUID

from sqlalchemy.orm import Session

from ucom.core.exceptions import NotFoundException
from ucom.models.org import Org
from ucom.models.tenant_context import TenantContext
from ucom.repositories.org_repository import OrgRepository
from ucom.schemas.org_schemas import OrgCreate, OrgUpdate


class OrgService:
    """Service for org business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrgRepository(db)

    def create_org(self, data: OrgCreate, context: TenantContext) -> Org:
        """Create an org owned by the caller's tenant"""
        org = Org(tenant_id=context.tenant_id, name=data.name)
        return self.repo.create(org)

    def list_orgs(self) -> list[Org]:
        """List orgs visible to the bound tenant"""
        return self.repo.get_all()

    def get_org(self, org_id: UUID) -> Org:
        """
        Get org by ID.

        Raises:
            NotFoundException: If org not found or owned by another tenant
        """
        org = self.repo.get_by_id(org_id)
        if not org:
            raise NotFoundException("Org not found")
        return org

    def rename_org(self, org_id: UUID, data: OrgUpdate) -> Org:
        """Rename org; zero affected rows means it is not visible"""
        if self.repo.update_name(org_id, data.name) == 0:
            raise NotFoundException("Org not found")
        return self.get_org(org_id)

    def delete_org(self, org_id: UUID) -> None:
        """Delete org and, through the database cascade, its brands and locations"""
        org = self.get_org(org_id)
        self.repo.delete(org)
