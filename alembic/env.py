"""Alembic environment configuration.

Reads DATABASE_URL from oauth_registry.core.config and imports the
SQLAlchemy metadata for autogenerate support.
"""

from __future__ import annotations

from sqlalchemy import engine_from_config, pool

from alembic import context
from oauth_registry.core.config import SETTINGS
from oauth_registry.core.logging import setup_logging
from oauth_registry.db.engine import Base

config = context.config

if SETTINGS.database_url:
    # Alembic runs synchronous migrations, so drop the asyncpg driver
    sync_url = SETTINGS.database_url.replace("postgresql+asyncpg", "postgresql")
    config.set_main_option("sqlalchemy.url", sync_url)

setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

# Import table module so Base.metadata sees all table definitions.
import oauth_registry.db.tables  # noqa: E402, F401

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL without a live DB)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (connected to a live DB)."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
