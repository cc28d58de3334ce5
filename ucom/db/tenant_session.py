"""
Tenant context propagation for row level security.

Policies compare ``tenant_id`` with the ``app.current_tenant_id`` session
setting. The helpers here guarantee that setting is the first statement of
every transaction that runs on behalf of a tenant, and that a pooled
connection never hands a previous tenant's context to its next borrower.

Usage:
    with tenant_session(tenant_id, SessionLocal) as db:
        db.query(Brand).all()          # only this tenant's brands

    with tenant_connection(engine, tenant_id) as conn:
        conn.execute(text("SELECT brand_id FROM brands"))
"""

from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

import structlog
from sqlalchemy import event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session, sessionmaker

from ucom.core.exceptions import ValidationException
from ucom.db.tables import TENANT_SETTING

logger = structlog.get_logger(__name__)

SESSION_INFO_KEY = "tenant_id"

_SET_TENANT_SQL = text("SELECT set_config(:setting, :tenant_id, :is_local)")


def coerce_tenant_id(tenant_id: UUID | str) -> UUID:
    """Validate a tenant identifier before it is sent to the database"""
    if isinstance(tenant_id, UUID):
        return tenant_id
    try:
        return UUID(str(tenant_id))
    except ValueError:
        raise ValidationException(f"Invalid tenant id: {tenant_id!r}")


def set_tenant(connection: Connection, tenant_id: UUID | str, local: bool = True) -> UUID:
    """
    Set the tenant context on a connection.

    Args:
        connection: SQLAlchemy Core connection
        tenant_id: Tenant UUID (or its string form)
        local: True scopes the setting to the current transaction
            (SET LOCAL semantics); False keeps it for the session

    Returns:
        The validated tenant UUID

    Raises:
        ValidationException: If tenant_id is not a UUID (no SQL is issued)
    """
    tid = coerce_tenant_id(tenant_id)
    connection.execute(
        _SET_TENANT_SQL,
        {"setting": TENANT_SETTING, "tenant_id": str(tid), "is_local": local},
    )
    return tid


def clear_tenant(connection: Connection) -> None:
    """Reset the session-level tenant context (policies then match nothing)"""
    connection.execute(
        _SET_TENANT_SQL,
        {"setting": TENANT_SETTING, "tenant_id": "", "is_local": False},
    )


def bind_tenant(session: Session, tenant_id: UUID | str) -> UUID:
    """
    Bind a Session to a tenant.

    The tenant is applied as the first statement of every transaction the
    session begins (see ``_apply_tenant_context``), so the context survives
    ``commit()`` without ever outliving a transaction. If the session is
    already inside a transaction the context is applied immediately.
    """
    tid = coerce_tenant_id(tenant_id)
    session.info[SESSION_INFO_KEY] = tid
    if session.in_transaction():
        set_tenant(session.connection(), tid)
    structlog.contextvars.bind_contextvars(tenant_id=str(tid))
    return tid


@event.listens_for(Session, "after_begin")
def _apply_tenant_context(session: Session, transaction, connection: Connection) -> None:
    tid = session.info.get(SESSION_INFO_KEY)
    if tid is not None:
        set_tenant(connection, tid)


@contextmanager
def tenant_session(tenant_id: UUID | str, session_factory: sessionmaker) -> Iterator[Session]:
    """
    Yield a Session scoped to one tenant.

    Commits on success, rolls back on error, always closes.
    """
    db = session_factory()
    try:
        bind_tenant(db, tenant_id)
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def tenant_connection(engine: Engine, tenant_id: UUID | str) -> Iterator[Connection]:
    """Yield a Core connection in a transaction whose first statement sets the tenant"""
    with engine.begin() as conn:
        set_tenant(conn, tenant_id)
        yield conn


def install_pool_reset(engine: Engine) -> Engine:
    """
    Clear the tenant context on every connection returned to the pool.

    ``SET LOCAL`` already ends with its transaction; this also covers
    session-level settings made through raw connections. A connection that
    cannot be reset is invalidated so it is never handed out again.
    """

    @event.listens_for(engine, "checkin")
    def _reset_tenant_on_checkin(dbapi_connection, connection_record):
        if dbapi_connection is None:
            return
        try:
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("SELECT set_config('app.current_tenant_id', '', false)")
            finally:
                cursor.close()
            dbapi_connection.commit()
        except Exception as exc:
            logger.warning("tenant_context_reset_failed", error=str(exc))
            connection_record.invalidate(exc)

    return engine
