"""Tenant context for request authorization."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class TenantContext:
    """
    Tenant context for one request.

    Extracted from the JWT and applied to the database session as the
    app.current_tenant_id setting. Everything the request reads or writes is
    scoped to tenant_id by row level security.

    Attributes:
        tenant_id: The tenant the request acts for
        subject: The authenticated principal ('sub' claim)
    """

    tenant_id: UUID
    subject: str

    def __repr__(self) -> str:
        return f"<TenantContext(tenant_id={self.tenant_id}, subject={self.subject})>"
