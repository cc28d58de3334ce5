"""tenant_isolation

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op

from ucom.db.migrate import SCHEMA_PATH


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLES = [
    'orders',
    'customers',
    'purchase_orders',
    'inventory',
    'suppliers',
    'products',
    'locations',
    'brands',
    'orgs',
]


def upgrade() -> None:
    """
    Install the tenant isolation schema.

    Creates:
    - app schema with current_tenant_id(), forbid_tenant_change(), touch_updated_at()
    - orgs -> brands -> locations hierarchy with composite (tenant_id, parent) keys
    - products, suppliers, inventory, purchase_orders, customers, orders

    Every table gets row level security ENABLED and FORCED with a
    <table>_tenant_isolation policy. schema.sql is sent as one batch.
    """
    op.get_bind().execution_options(no_parameters=True).exec_driver_sql(
        SCHEMA_PATH.read_text(encoding="utf-8")
    )


def downgrade() -> None:
    """
    Remove the tenant isolation schema.

    WARNING: This drops every tenant's data.
    """
    for table in TABLES:
        op.execute(f"DROP TABLE IF EXISTS {table} CASCADE")
    op.execute("DROP FUNCTION IF EXISTS app.touch_updated_at()")
    op.execute("DROP FUNCTION IF EXISTS app.forbid_tenant_change()")
    op.execute("DROP FUNCTION IF EXISTS app.current_tenant_id()")
