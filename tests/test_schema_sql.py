"""Static checks on the SQL shipped with the package."""

import re

import pytest

from ucom.db.migrate import SCHEMA_PATH, SEED_PATH
from ucom.db.tables import HIERARCHY, TENANT_TABLES

SCHEMA = SCHEMA_PATH.read_text(encoding="utf-8")
SEED = SEED_PATH.read_text(encoding="utf-8")


def _table_block(table):
    match = re.search(rf"CREATE TABLE IF NOT EXISTS {table} \((.*?)\n\);", SCHEMA, re.DOTALL)
    assert match, f"{table} not created"
    return match.group(1)


@pytest.mark.parametrize("table", TENANT_TABLES)
class TestTenantTable:
    def test_has_tenant_id(self, table):
        assert re.search(r"^\s+tenant_id\s+uuid\s+NOT NULL", _table_block(table), re.MULTILINE)

    def test_rls_enabled_and_forced(self, table):
        assert f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;" in SCHEMA
        assert f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY;" in SCHEMA

    def test_policy_checks_reads_and_writes(self, table):
        policy = re.search(
            rf"CREATE POLICY {table}_tenant_isolation ON {table}\n(.*?);", SCHEMA, re.DOTALL
        )
        assert policy, f"{table} has no isolation policy"
        assert "FOR ALL" in policy.group(1)
        assert "USING (tenant_id = app.current_tenant_id())" in policy.group(1)
        assert "WITH CHECK (tenant_id = app.current_tenant_id())" in policy.group(1)

    def test_tenant_id_immutable(self, table):
        assert re.search(
            rf"CREATE TRIGGER {table}_tenant_immutable\s+BEFORE UPDATE ON {table}\s+FOR EACH ROW\s+"
            r"WHEN \(NEW\.tenant_id IS DISTINCT FROM OLD\.tenant_id\)",
            SCHEMA,
        )


@pytest.mark.parametrize("child,parent", [("brands", "orgs"), ("locations", "brands")])
def test_hierarchy_parents_are_composite_and_cascade(child, parent):
    block = _table_block(child)
    assert re.search(rf"REFERENCES {parent} \(tenant_id, [a-z_, ]+\) ON DELETE CASCADE", block)


def test_hierarchy_order():
    assert HIERARCHY == ("orgs", "brands", "locations")
    assert TENANT_TABLES[: len(HIERARCHY)] == HIERARCHY


def test_missing_context_matches_nothing():
    """An unset or empty setting must yield NULL, never a usable tenant"""
    assert "NULLIF(current_setting('app.current_tenant_id', true), '')::uuid" in SCHEMA


@pytest.mark.parametrize("sql", [SCHEMA, SEED], ids=["schema", "seed"])
def test_no_driver_placeholders(sql):
    # Both files are sent to the driver verbatim
    assert "%" not in sql


def test_seed_sets_context_first():
    body = "\n".join(line for line in SEED.splitlines() if not line.startswith("--"))
    assert body.strip().startswith("SELECT set_config('app.current_tenant_id'")


def test_seed_is_idempotent():
    inserts = re.findall(r"INSERT INTO .*?;", SEED, re.DOTALL)
    assert inserts
    assert all("ON CONFLICT DO NOTHING" in insert for insert in inserts)
