"""
Alembic environment.

The URL comes from the caller (``apply_db_migration``) or, when alembic is run
from the command line, from the config file named by ECOTRACK_CONFIG.
"""
import logging
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from ecotrack.core.config import get_config
from ecotrack.database import Base
from ecotrack.database import schemas  # noqa: F401  registers the models on Base.metadata
from ecotrack.database.base import get_sync_url
from ecotrack.utils.constants import ConfigFile

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

if not config.get_main_option("sqlalchemy.url"):
    app_config = get_config(os.environ.get("ECOTRACK_CONFIG", ConfigFile.DEVELOPMENT))
    config.set_main_option("sqlalchemy.url", get_sync_url(app_config).replace("%", "%%"))

target_metadata = Base.metadata

logger = logging.getLogger("alembic.env")


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
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
