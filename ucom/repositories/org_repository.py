"""Repository for Org model operations."""

from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from ucom.db.rls import commit
from ucom.models.org import Org


class OrgRepository:
    """
    Repository for Org model operations.

    Queries carry no tenant filter: the session is bound to a tenant and row
    level security decides visibility.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Org]:
        """Get all orgs visible to the session's tenant"""
        return self.db.query(Org).order_by(Org.name, Org.org_id).all()

    def get_by_id(self, org_id: UUID) -> Org | None:
        """
        Get org by ID.

        Returns None both when the org does not exist and when it belongs to
        another tenant; the two cases are deliberately indistinguishable.
        """
        return self.db.query(Org).filter(Org.org_id == org_id).first()

    def create(self, org: Org) -> Org:
        """
        Create a new org.

        Raises:
            TenantIsolationError: If org.tenant_id differs from the session's tenant
        """
        self.db.add(org)
        commit(self.db)
        self.db.refresh(org)
        return org

    def update_name(self, org_id: UUID, name: str) -> int:
        """
        Rename an org.

        Returns:
            Number of rows affected; 0 means the org is not visible
        """
        result = self.db.execute(
            update(Org).where(Org.org_id == org_id).values(name=name)
        )
        commit(self.db)
        return result.rowcount

    def delete(self, org: Org) -> None:
        """
        Delete an org.

        WARNING: The database cascades this to the org's brands and their
        locations (and everything hanging off them).
        """
        self.db.delete(org)
        commit(self.db)
