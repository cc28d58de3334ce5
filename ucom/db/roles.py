"""
Privilege separation between the administrative and application roles.

The administrative role (the DATABASE_URL credential) owns the schema, runs
migrations and provisions tenants. The application role can log in and run
DML on tenant tables, nothing else: no superuser, no BYPASSRLS, no DDL.
"""

import re

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Connection

from ucom.core.exceptions import ValidationException

logger = structlog.get_logger(__name__)

_ROLE_NAME = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")

APP_ROLE_ATTRIBUTES = "LOGIN NOSUPERUSER NOCREATEDB NOCREATEROLE NOBYPASSRLS"
APP_TABLE_PRIVILEGES = "SELECT, INSERT, UPDATE, DELETE"


def _quote_role(connection: Connection, role: str) -> str:
    if not _ROLE_NAME.match(role):
        raise ValidationException(f"Invalid role name: {role!r}")
    return connection.dialect.identifier_preparer.quote_identifier(role)


def _run(connection: Connection, statement: str) -> None:
    # DDL takes no bind parameters; send it as-is
    connection.execution_options(no_parameters=True).exec_driver_sql(statement)


def role_exists(connection: Connection, role: str) -> bool:
    return (
        connection.execute(
            text("SELECT 1 FROM pg_roles WHERE rolname = :role"), {"role": role}
        ).first()
        is not None
    )


def ensure_app_role(connection: Connection, role: str, password: str | None = None) -> bool:
    """
    Create the application role if absent, and pin its attributes.

    Args:
        connection: Administrative connection
        role: Role name (lowercase identifier)
        password: Optional login password

    Returns:
        True if the role was created, False if it already existed
    """
    ident = _quote_role(connection, role)
    attributes = APP_ROLE_ATTRIBUTES
    if password is not None:
        literal = connection.execute(text("SELECT quote_literal(:pw)"), {"pw": password}).scalar_one()
        attributes = f"{attributes} PASSWORD {literal}"

    if role_exists(connection, role):
        _run(connection, f"ALTER ROLE {ident} {attributes}")
        logger.info("app_role_updated", role=role)
        return False

    _run(connection, f"CREATE ROLE {ident} {attributes}")
    logger.info("app_role_created", role=role)
    return True


def grant_app_role(connection: Connection, role: str) -> None:
    """
    Grant the application role DML on tenant tables.

    Future tables created by the administrative role inherit the same
    grants. The migration ledger is left unreadable and unwritable.
    """
    ident = _quote_role(connection, role)
    statements = [
        f"GRANT USAGE ON SCHEMA public TO {ident}",
        f"GRANT USAGE ON SCHEMA app TO {ident}",
        f"GRANT {APP_TABLE_PRIVILEGES} ON ALL TABLES IN SCHEMA public TO {ident}",
        f"GRANT EXECUTE ON ALL FUNCTIONS IN SCHEMA app TO {ident}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public "
        f"GRANT {APP_TABLE_PRIVILEGES} ON TABLES TO {ident}",
    ]
    for statement in statements:
        _run(connection, statement)

    ledger = connection.execute(text("SELECT to_regclass('alembic_version')")).scalar()
    if ledger is not None:
        _run(connection, f"REVOKE ALL ON TABLE alembic_version FROM {ident}")

    logger.info("app_role_granted", role=role)


def role_attributes(connection: Connection, role: str) -> dict[str, bool] | None:
    """Return superuser / bypassrls / login flags for a role, or None if absent"""
    row = connection.execute(
        text(
            "SELECT rolsuper, rolbypassrls, rolcanlogin, rolcreaterole, rolcreatedb "
            "FROM pg_roles WHERE rolname = :role"
        ),
        {"role": role},
    ).first()
    if row is None:
        return None
    return {
        "superuser": bool(row[0]),
        "bypassrls": bool(row[1]),
        "login": bool(row[2]),
        "createrole": bool(row[3]),
        "createdb": bool(row[4]),
    }
