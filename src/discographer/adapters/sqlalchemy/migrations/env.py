"""Alembic environment for discographer.

``upgrade_head`` hands in the caller's connection through
``config.attributes["connection"]`` so in-memory SQLite databases are
migrated in place; the alembic CLI falls back to ``sqlalchemy.url``.
"""

from __future__ import annotations

from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, pool

from discographer.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from discographer.config import get_database_config

config = context.config

if config.config_file_name is not None and Path(config.config_file_name).suffix == ".ini":
    fileConfig(config.config_file_name)

start_mappers()

# SQLite cannot ALTER most constraints, so autogenerate emits batch operations
MIGRATION_OPTIONS = {
    "target_metadata": mapper_registry.metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _migrate(**options: object) -> None:
    context.configure(**MIGRATION_OPTIONS, **options)  # type: ignore[arg-type]
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _migrate(url=_database_url(), literal_binds=True)


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _migrate(connection=connection)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as own_connection:
            _migrate(connection=own_connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
