"""
Alembic environment configuration.
Migrations run on a SYNC engine (psycopg) even though the application uses
async SQLAlchemy; Alembic works better with sync drivers, especially behind pgbouncer.
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

from invoice_desk.core.config import settings
from invoice_desk.core.database import Base
from invoice_desk.models import *  # noqa: Import all models for autogenerate


config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_sync_url() -> str:
    """
    Database URL with a sync driver.
    asyncpg URLs are switched to psycopg; aiosqlite to the builtin sqlite driver.
    """
    url = config.attributes.get("sqlalchemy.url") or settings.DATABASE_URL_SYNC

    if "+asyncpg" in url:
        url = url.replace("+asyncpg", "+psycopg")
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    elif "+aiosqlite" in url:
        url = url.replace("+aiosqlite", "")
    return url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.
    Emits SQL to the script output instead of executing it.
    """
    context.configure(
        url=get_sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with a sync engine."""
    connectable = create_engine(get_sync_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
