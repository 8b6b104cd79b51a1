"""
Session source for test factories.

Factories are declared at import time, before any database exists, so they
hold this lazy wrapper; conftest binds it to the per-test ``Database``.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.session_manager.db_session import Database


class LazySessionMaker:
    """
    Acts like a sessionmaker but defers to whichever Database is bound.

    This ensures factories write through the same engine as the test app.
    """

    def __init__(self):
        self._database: Optional[Database] = None

    def bind(self, database: Database):
        self._database = database

    def unbind(self):
        self._database = None

    def __call__(self) -> AsyncSession:
        """
        Create and return a new async session.

        Returns an AsyncSession that can be used as an async context manager.
        """
        if self._database is None:
            raise RuntimeError(
                "No database bound. The test_database fixture binds one in conftest."
            )
        return self._database.session_maker()


# Shared instance that factories will use
async_session = LazySessionMaker()
