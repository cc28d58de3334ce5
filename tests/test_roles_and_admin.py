import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from ucom.core.exceptions import ValidationException
from ucom.db.admin import purge_tenant
from ucom.db.roles import ensure_app_role, grant_app_role
from ucom.db.tables import TENANT_TABLES


def _connection(role_exists=False, ledger_exists=True):
    """Mock admin connection speaking the Postgres dialect"""
    conn = MagicMock()
    conn.dialect = postgresql.dialect()

    result = MagicMock()
    result.first.return_value = (1,) if role_exists else None
    result.scalar_one.return_value = "'s3cret'"
    result.scalar.return_value = "alembic_version" if ledger_exists else None
    conn.execute.return_value = result
    return conn


def _ddl(conn):
    return [c.args[0] for c in conn.execution_options.return_value.exec_driver_sql.call_args_list]


class TestEnsureAppRole:
    """Tests for creating the application role"""

    def test_creates_role_without_bypass(self):
        conn = _connection(role_exists=False)

        created = ensure_app_role(conn, "ucom_app")

        assert created is True
        assert _ddl(conn) == [
            'CREATE ROLE "ucom_app" LOGIN NOSUPERUSER NOCREATEDB NOCREATEROLE NOBYPASSRLS'
        ]

    def test_existing_role_is_altered(self):
        conn = _connection(role_exists=True)

        created = ensure_app_role(conn, "ucom_app", password="s3cret")

        assert created is False
        statement = _ddl(conn)[0]
        assert statement.startswith('ALTER ROLE "ucom_app" ')
        assert "NOBYPASSRLS" in statement
        assert statement.endswith("PASSWORD 's3cret'")

    @pytest.mark.parametrize("role", ["", "App", "ucom-app", "x; DROP ROLE postgres", "1abc"])
    def test_invalid_role_names_rejected_before_sql(self, role):
        conn = _connection()

        with pytest.raises(ValidationException):
            ensure_app_role(conn, role)

        conn.execute.assert_not_called()
        assert _ddl(conn) == []


class TestGrantAppRole:
    """Tests for granting the application role table access"""

    def test_grants_dml_only(self):
        conn = _connection()

        grant_app_role(conn, "ucom_app")

        statements = _ddl(conn)
        assert 'GRANT SELECT, INSERT, UPDATE, DELETE ON ALL TABLES IN SCHEMA public TO "ucom_app"' in statements
        assert 'GRANT USAGE ON SCHEMA app TO "ucom_app"' in statements
        assert 'REVOKE ALL ON TABLE alembic_version FROM "ucom_app"' in statements
        assert not any("CREATE" in s and "GRANT" in s for s in statements)

    def test_no_ledger_no_revoke(self):
        conn = _connection(ledger_exists=False)

        grant_app_role(conn, "ucom_app")

        assert not any("alembic_version" in s for s in _ddl(conn))


class TestPurgeTenant:
    """Tests for deleting a tenant's data"""

    def test_context_set_then_children_first(self):
        conn = MagicMock()
        conn.execute.return_value.rowcount = 2
        tenant_id = uuid.uuid4()

        counts = purge_tenant(conn, str(tenant_id))

        calls = conn.execute.call_args_list
        assert "set_config" in str(calls[0].args[0])
        assert calls[0].args[1]["tenant_id"] == str(tenant_id)

        deletes = [str(c.args[0]) for c in calls[1:]]
        assert deletes == [
            f"DELETE FROM {table} WHERE tenant_id = :tenant_id" for table in reversed(TENANT_TABLES)
        ]
        assert all(c.args[1] == {"tenant_id": str(tenant_id)} for c in calls[1:])
        assert list(counts) == list(reversed(TENANT_TABLES))
        assert counts["orgs"] == 2

    def test_invalid_tenant_rejected(self):
        conn = MagicMock()

        with pytest.raises(ValidationException):
            purge_tenant(conn, "everyone")

        conn.execute.assert_not_called()
