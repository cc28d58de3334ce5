"""ucom-db -- administrative command line for the tenant isolation database.

Commands run with the administrative credential from DATABASE_URL. Human
readable output goes to stderr via Rich; every failure exits with code 1.
"""

from typing import Optional
from uuid import UUID

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from ucom.config import Settings
from ucom.core.exceptions import ConfigurationError, MigrationError, ValidationException
from ucom.core.logging import configure_logging, get_logger
from ucom.database import create_admin_engine
from ucom.db.admin import purge_tenant
from ucom.db.migrate import migrate, require_database_url
from ucom.db.rls import verify_rls
from ucom.db.roles import ensure_app_role, grant_app_role

app = typer.Typer(
    name="ucom-db",
    help="Schema migrations, role provisioning and tenant administration.",
    no_args_is_help=True,
)
console = Console(stderr=True)
logger = get_logger(__name__)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _database_url() -> str:
    try:
        return require_database_url(Settings())
    except ConfigurationError as exc:
        _fail(str(exc))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Human-readable debug logging."),
) -> None:
    configure_logging(debug=verbose)


@app.command("migrate")
def migrate_command(
    seed: bool = typer.Option(
        False, "--seed", help="Also apply seed.sql (same as DB_SEED=1)."
    ),
) -> None:
    """Apply pending schema revisions, and optionally seed data."""
    try:
        result = migrate(Settings(), seed=seed)
    except ConfigurationError as exc:
        _fail(str(exc))
    except MigrationError as exc:
        logger.error("migration_failed", error=str(exc))
        _fail(f"Migration failed: {exc}")

    if result.applied:
        console.print(f"Applied schema revision {result.to_revision}")
    else:
        console.print(f"Schema already at revision {result.to_revision}")
    if result.seeded:
        console.print("Seed data applied")
    console.print("[green]Database migration complete[/green]")


@app.command("grant-app-role")
def grant_app_role_command(
    role: str = typer.Argument(..., help="Application role name."),
    password: Optional[str] = typer.Option(
        None, "--password", envvar="APP_ROLE_PASSWORD", help="Login password for the role."
    ),
) -> None:
    """Create (if needed) the low-privilege application role and grant it DML."""
    engine = create_admin_engine(_database_url())
    try:
        with engine.begin() as conn:
            created = ensure_app_role(conn, role, password)
            grant_app_role(conn, role)
    except ValidationException as exc:
        _fail(str(exc))
    except SQLAlchemyError as exc:
        _fail(f"Granting {role} failed: {exc}")
    finally:
        engine.dispose()

    console.print(f"{'Created' if created else 'Updated'} role {role} and granted table access")


@app.command("verify-rls")
def verify_rls_command() -> None:
    """Check that every tenant table has row level security enabled and forced."""
    engine = create_admin_engine(_database_url())
    try:
        with engine.connect() as conn:
            problems = verify_rls(conn)
    except SQLAlchemyError as exc:
        _fail(f"Inspection failed: {exc}")
    finally:
        engine.dispose()

    if problems:
        for problem in problems:
            console.print(f"[red]{problem}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]Row level security enforced on all tenant tables[/green]")


@app.command("purge-tenant")
def purge_tenant_command(
    tenant_id: UUID = typer.Argument(..., help="Tenant to delete."),
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
) -> None:
    """Delete every row owned by a tenant. Irreversible."""
    if not yes:
        typer.confirm(f"Delete ALL data owned by tenant {tenant_id}?", abort=True)

    engine = create_admin_engine(_database_url())
    try:
        with engine.begin() as conn:
            counts = purge_tenant(conn, tenant_id)
    except SQLAlchemyError as exc:
        _fail(f"Purge failed: {exc}")
    finally:
        engine.dispose()

    for table, count in counts.items():
        console.print(f"{table}: {count}")
    console.print(f"[green]Tenant {tenant_id} purged[/green]")


if __name__ == "__main__":
    app()
