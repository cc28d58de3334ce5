"""Org model: the first level under a tenant."""

import uuid

from sqlalchemy import String, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ucom.models.base import Base, TimestampMixin


class Org(Base, TimestampMixin):
    """
    Organizational unit owned by exactly one tenant.

    org_id is globally unique, but a row is only visible while the session's
    tenant context equals its tenant_id. The (tenant_id, org_id) unique key
    is what brands reference, so a brand can never point at another
    tenant's org.
    """

    __tablename__ = "orgs"

    org_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "org_id", name="orgs_tenant_org_key"),
    )

    def __repr__(self) -> str:
        return f"<Org(org_id={self.org_id}, tenant_id={self.tenant_id}, name='{self.name}')>"
