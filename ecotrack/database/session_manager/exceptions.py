"""
Database exceptions.
"""
from ecotrack.core.exceptions import StorageError


class DatabaseNotInitialized(StorageError):
    """Raised when a session is requested before the database is set up."""
    pass


class DatabaseTransactionError(StorageError):
    """Raised when a database transaction fails."""
    pass
