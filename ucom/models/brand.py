"""Brand model: owned by an org, and through it by a tenant."""

import uuid

from sqlalchemy import Index, String, Uuid, UniqueConstraint, ForeignKeyConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from ucom.models.base import Base, TimestampMixin


class Brand(Base, TimestampMixin):
    """
    Commerce entity owned by an org.

    The parent reference is the composite (tenant_id, org_id): a valid org_id
    belonging to a different tenant does not satisfy it. Deleting the org
    cascades to its brands in the database.
    """

    __tablename__ = "brands"

    brand_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    org_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "brand_id", name="brands_tenant_brand_key"),
        UniqueConstraint("tenant_id", "org_id", "brand_id", name="brands_tenant_org_brand_key"),
        ForeignKeyConstraint(
            ["tenant_id", "org_id"],
            ["orgs.tenant_id", "orgs.org_id"],
            ondelete="CASCADE",
            name="brands_org_fkey",
        ),
        # Slugs are unique per tenant; brands without one are unconstrained
        Index(
            "brands_tenant_slug_idx",
            "tenant_id",
            "slug",
            unique=True,
            postgresql_where=text("slug IS NOT NULL"),
            sqlite_where=text("slug IS NOT NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Brand(brand_id={self.brand_id}, org_id={self.org_id}, name='{self.name}')>"
