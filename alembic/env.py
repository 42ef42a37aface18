"""
WorkHours - Alembic Environment

The database URL and schema come from app.config, so migrations target the
same database as the running service (SQL Server, or any WORKHOURS_DB_URL).
"""

import logging
from logging.config import fileConfig

import sqlalchemy as sa
from alembic import context
from sqlalchemy.exc import DBAPIError
from sqlalchemy.pool import NullPool

from app.config import get_settings
from app.models import Base


config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")
settings = get_settings()
SCHEMA = settings.db_schema or None


def _options(version_table_schema):
    """context.configure() arguments shared by offline and online runs."""
    return dict(
        target_metadata=Base.metadata,
        compare_type=True,
        compare_server_default=True,
        include_schemas=SCHEMA is not None,
        version_table_schema=version_table_schema,
    )


def _version_schema(connection):
    """
    Schema for alembic_version.

    On SQL Server the configured schema is created first, since
    alembic_version is written before any migration runs. If that is
    not permitted the default schema is used instead.
    """
    if SCHEMA is None or connection.dialect.name != "mssql":
        return SCHEMA
    try:
        connection.execute(sa.text(
            f"IF NOT EXISTS (SELECT * FROM sys.schemas WHERE name = '{SCHEMA}') "
            f"EXEC('CREATE SCHEMA {SCHEMA}')"
        ))
        connection.commit()
    except DBAPIError:
        logger.warning("Cannot create schema %r; alembic_version goes to the default schema", SCHEMA)
        connection.rollback()
        return None
    return SCHEMA


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(SCHEMA),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    engine = sa.create_engine(settings.database_url, poolclass=NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, **_options(_version_schema(connection)))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
