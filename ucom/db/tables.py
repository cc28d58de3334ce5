"""Registry of tenant-scoped tables.

Every table listed here carries ``tenant_id``, has row level security
enabled and forced, and a ``<table>_tenant_isolation`` policy in
``schema.sql``. Order is parent-before-child, so the reverse is a safe
deletion order.
"""

HIERARCHY: tuple[str, ...] = ("orgs", "brands", "locations")

TENANT_TABLES: tuple[str, ...] = (
    "orgs",
    "brands",
    "locations",
    "products",
    "suppliers",
    "inventory",
    "purchase_orders",
    "customers",
    "orders",
)

# Session setting read by app.current_tenant_id()
TENANT_SETTING = "app.current_tenant_id"
