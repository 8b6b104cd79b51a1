"""
Database engine configuration.

Builds the async engine URL from config and runs Alembic migrations.
"""
import asyncio
import contextlib
import functools
import logging
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config as alembic_config
from sqlalchemy import text
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ecotrack.core.config import Config

DEFAULT_DRIVERNAME = "postgresql+asyncpg"

engine_kw = {
    "pool_pre_ping": True,
    # feature will normally emit SQL equivalent to "SELECT 1" each time a connection is checked out from the pool
    "pool_size": 2,  # number of connections to keep open at a time
    "max_overflow": 4,  # number of connections to allow to be opened above pool_size
    "connect_args": {
        "prepared_statement_cache_size": 0,  # disable prepared statement cache
        "statement_cache_size": 0,  # disable statement cache
    },
}


def get_db_url(config: Config) -> URL:
    """
    Construct database URL from config.

    A ``url`` key wins over the individual connection fields.
    """
    config_db = dict(config.data["db"])
    if config_db.get("url"):
        return make_url(config_db["url"])

    drivername = config_db.pop("drivername", DEFAULT_DRIVERNAME)
    return URL.create(drivername=drivername, **config_db)


def get_engine_kw(async_db_url: URL) -> dict[str, Any]:
    """
    Engine keyword arguments for the given backend.

    Pool sizing and asyncpg statement cache settings only apply to PostgreSQL.
    """
    if async_db_url.get_backend_name() == "postgresql":
        return engine_kw
    return {}


def get_async_engine(async_db_url: URL) -> AsyncEngine:
    """
    Create a standalone async engine, used for maintenance connections.
    """
    return create_async_engine(async_db_url, **get_engine_kw(async_db_url))


async def create_database(config: Config) -> bool:
    """
    Ensures the PostgreSQL database specified in the config exists.

    Connects to the 'postgres' maintenance database to issue CREATE DATABASE.
    Other backends create their database on first connect, so this is a no-op for them.

    Returns:
        True if the database was newly created by this function, False otherwise.

    Raises:
        ValueError: If the database name is missing in the configuration.
    """
    async_db_url = get_db_url(config)
    if async_db_url.get_backend_name() != "postgresql":
        return False

    target_database_name = async_db_url.database
    if not target_database_name:
        logging.error("Database name not found in configuration for creation.")
        raise ValueError("Database name missing in configuration for creation.")

    maintenance_url = async_db_url.set(database="postgres")
    maintenance_engine = get_async_engine(maintenance_url)
    try:
        logging.info(
            f"Attempting to create database '{target_database_name}' on {async_db_url.host} if it does not exist."
        )
        async with maintenance_engine.connect() as connection:
            # CREATE DATABASE cannot run inside a transaction block
            autocommit_connection = await connection.execution_options(
                isolation_level="AUTOCOMMIT"
            )
            await autocommit_connection.execute(
                text(f'CREATE DATABASE "{target_database_name}"')
            )
        logging.info(f"Database '{target_database_name}' created successfully.")
        return True
    except DBAPIError as e:
        # 42P04 is duplicate_database
        with contextlib.suppress(AttributeError):
            if getattr(e.orig, "pgcode", None) == "42P04" or "already exists" in str(e):
                logging.warning(
                    f"Database '{target_database_name}' already exists. No action taken."
                )
                return False

        logging.error(
            f"A DBAPIError occurred while trying to create database '{target_database_name}': {e}"
        )
        raise
    finally:
        await maintenance_engine.dispose()


def get_sync_url(config: Config) -> str:
    """Synchronous driver URL for Alembic."""
    async_url = get_db_url(config)
    sync_driver = {
        "postgresql": "postgresql",
        "sqlite": "sqlite",
    }.get(async_url.get_backend_name(), async_url.drivername)
    return async_url.set(drivername=sync_driver).render_as_string(hide_password=False)


async def apply_db_migration(config: Config):
    """
    Create the database if needed and upgrade it to the latest Alembic revision.

    Alembic runs synchronously, so it is pushed to the default executor.
    """
    await create_database(config)

    alembic_cfg = alembic_config(str(Path.cwd() / "alembic.ini"))
    alembic_cfg.set_main_option(
        "script_location", str(Path.cwd() / "alembic_migrations")
    )
    alembic_cfg.set_main_option(
        "sqlalchemy.url", get_sync_url(config).replace("%", "%%")
    )

    logging.info("Starting database migrations...")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, functools.partial(command.upgrade, alembic_cfg, "head")
    )
    logging.info("Database migration completed successfully")
