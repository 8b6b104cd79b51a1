"""
Database session manager.

One ``Database`` is built per application at startup and kept on
``app.state.database``; request handlers get sessions from it through
``get_db_session``.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ecotrack.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and the session factory bound to it."""

    def __init__(self, async_db_url: URL, engine_kw: Optional[dict[str, Any]] = None):
        self.url = async_db_url
        self.engine = create_async_engine(async_db_url, **(engine_kw or {}))
        self._async_session_maker: Optional[async_sessionmaker[AsyncSession]] = (
            async_sessionmaker(
                bind=self.engine, expire_on_commit=False, class_=AsyncSession
            )
        )
        logger.info(f"Database initialized for {async_db_url.get_backend_name()}")

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized("Database has been disposed")
        return self._async_session_maker

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session and commit it when the block exits cleanly.

        Storage failures are rolled back and re-raised as DatabaseTransactionError;
        any other exception is rolled back and propagated unchanged.
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database transaction failed: {e}")
            raise DatabaseTransactionError("Database transaction failed") from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def ping(self) -> bool:
        """Run ``SELECT 1`` against the database."""
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        return True

    async def dispose(self):
        """Close all pooled connections."""
        await self.engine.dispose()
        self._async_session_maker = None
        logger.info("Database connections disposed")
