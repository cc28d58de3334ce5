"""Row level security inspection and database error classification."""

from dataclasses import dataclass, field
from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from ucom.core.exceptions import ConflictException, LineageViolationError, TenantIsolationError
from ucom.db.tables import TENANT_TABLES

# SQLSTATE codes
INSUFFICIENT_PRIVILEGE = "42501"
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


@dataclass
class RlsStatus:
    """Row level security flags and policies of one table"""

    table: str
    exists: bool = True
    enabled: bool = False
    forced: bool = False
    policies: list[str] = field(default_factory=list)

    @property
    def enforced(self) -> bool:
        return self.exists and self.enabled and self.forced and bool(self.policies)


def rls_status(connection: Connection, tables: Iterable[str] = TENANT_TABLES) -> dict[str, RlsStatus]:
    """Read relrowsecurity / relforcerowsecurity and policy names from the catalog"""
    result = {}
    for table in tables:
        row = connection.execute(
            text(
                "SELECT c.relrowsecurity, c.relforcerowsecurity "
                "FROM pg_class c JOIN pg_namespace n ON n.oid = c.relnamespace "
                "WHERE c.relname = :table AND n.nspname = current_schema()"
            ),
            {"table": table},
        ).first()
        if row is None:
            result[table] = RlsStatus(table=table, exists=False)
            continue

        policies = connection.execute(
            text(
                "SELECT policyname FROM pg_policies "
                "WHERE tablename = :table AND schemaname = current_schema() "
                "ORDER BY policyname"
            ),
            {"table": table},
        ).scalars().all()
        result[table] = RlsStatus(
            table=table,
            enabled=bool(row[0]),
            forced=bool(row[1]),
            policies=list(policies),
        )
    return result


def verify_rls(connection: Connection, tables: Iterable[str] = TENANT_TABLES) -> list[str]:
    """
    Check that every tenant-scoped table is protected.

    Returns:
        List of problems, one line each; empty when every table has row
        level security enabled, forced, and at least one policy
    """
    problems = []
    for table, status in rls_status(connection, tables).items():
        if not status.exists:
            problems.append(f"{table}: table missing")
            continue
        if not status.enabled:
            problems.append(f"{table}: row level security not enabled")
        if not status.forced:
            problems.append(f"{table}: row level security not forced")
        if not status.policies:
            problems.append(f"{table}: no policy defined")
    return problems


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def classify_db_error(exc: DBAPIError) -> Exception:
    """
    Map a driver error to the tenancy exception it represents.

    A policy rejection becomes ``TenantIsolationError``, a composite foreign
    key failure ``LineageViolationError`` and a unique key collision
    ``ConflictException``. Plain privilege errors (42501 without a policy
    message, e.g. a revoked table) and anything else are returned unchanged
    so the caller re-raises the original error.
    """
    code = _sqlstate(exc)
    message = str(getattr(exc, "orig", None) or exc).strip()
    if code in (INSUFFICIENT_PRIVILEGE, None) and "row-level security" in message:
        return TenantIsolationError(message)
    if code == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in message:
        return LineageViolationError(message)
    if code == UNIQUE_VIOLATION or "UNIQUE constraint failed" in message:
        return ConflictException(message)
    return exc


def commit(session: Session) -> None:
    """
    Commit, surfacing policy and lineage rejections as tenancy exceptions.

    The session is rolled back before the classified error propagates; a
    rejected write is never downgraded to a silent no-op.
    """
    try:
        session.commit()
    except DBAPIError as exc:
        session.rollback()
        classified = classify_db_error(exc)
        if classified is exc:
            raise
        raise classified from exc
