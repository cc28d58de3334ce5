"""Administrative tenant operations (run on the administrative connection)."""

from uuid import UUID

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Connection

from ucom.db.tables import TENANT_TABLES
from ucom.db.tenant_session import coerce_tenant_id, set_tenant

logger = structlog.get_logger(__name__)


def purge_tenant(connection: Connection, tenant_id: UUID | str) -> dict[str, int]:
    """
    Delete every row owned by a tenant.

    Tables are emptied child-first. Most children are already gone by the
    time their table is reached (the composite foreign keys cascade), so the
    counts report what each statement removed directly. The tenant context is
    set as well, so the purge also works for a non-superuser table owner
    under forced row level security.

    WARNING: irreversible. The caller owns the transaction; a failure part
    way through must roll the whole purge back.

    Args:
        connection: Administrative connection inside a transaction
        tenant_id: Tenant to purge

    Returns:
        Mapping of table name to rows deleted by that table's statement
    """
    tid = coerce_tenant_id(tenant_id)
    set_tenant(connection, tid)

    counts = {}
    for table in reversed(TENANT_TABLES):
        result = connection.execute(
            text(f"DELETE FROM {table} WHERE tenant_id = :tenant_id"),
            {"tenant_id": str(tid)},
        )
        counts[table] = result.rowcount

    logger.warning("tenant_purged", tenant_id=str(tid), deleted=counts)
    return counts
