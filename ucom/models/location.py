"""Location model: owned by a brand."""

import uuid

from sqlalchemy import String, Uuid, UniqueConstraint, ForeignKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ucom.models.base import Base, TimestampMixin


class Location(Base, TimestampMixin):
    """
    Physical or operational unit owned by a brand.

    (tenant_id, org_id, brand_id) must match an existing brand row exactly,
    which blocks attaching a location to another tenant's brand even when
    the caller supplies its own valid org_id.
    """

    __tablename__ = "locations"

    location_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    org_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    brand_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "location_id", name="locations_tenant_location_key"),
        ForeignKeyConstraint(
            ["tenant_id", "org_id", "brand_id"],
            ["brands.tenant_id", "brands.org_id", "brands.brand_id"],
            ondelete="CASCADE",
            name="locations_brand_fkey",
        ),
    )

    def __repr__(self) -> str:
        return f"<Location(location_id={self.location_id}, brand_id={self.brand_id}, name='{self.name}')>"
