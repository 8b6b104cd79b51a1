"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from ecotrack.database.repositories.activity import (
    ActivityRepository,
    CarbonEntryRepository,
)
from ecotrack.database.repositories.base import BaseRepository
from ecotrack.database.repositories.goal import GoalRepository
from ecotrack.database.repositories.tip import TipRepository
from ecotrack.database.repositories.user import UserRepository

__all__ = [
    "ActivityRepository",
    "BaseRepository",
    "CarbonEntryRepository",
    "GoalRepository",
    "TipRepository",
    "UserRepository",
]
