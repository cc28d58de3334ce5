from alembic import context
from sqlalchemy import create_engine, pool

from ucom.config import settings, sqlalchemy_url
from ucom.core.exceptions import ConfigurationError

config = context.config


def _database_url() -> str:
    url = config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL
    if not url:
        raise ConfigurationError("DATABASE_URL is required to run migrations")
    return sqlalchemy_url(url)


def run_migrations_online():
    # The migration runner hands over its own connection and transaction
    connection = config.attributes.get("connection")
    if connection is not None:
        context.configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()
        return

    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    raise ConfigurationError("Offline (--sql) migrations are not supported")
run_migrations_online()
