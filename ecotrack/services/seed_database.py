"""
Database seeding service for the tip catalogue and a demo account.

Usage:
    from ecotrack.services.seed_database import DatabaseSeeder

    async with DatabaseSeeder(database, password_hasher) as seeder:
        await seeder.seed_all(clear_existing=True)
"""

import logging
from typing import Any, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.security import PasswordHasher
from ecotrack.database.repositories import TipRepository, UserRepository
from ecotrack.database.schemas import TipDBModel
from ecotrack.database.session_manager.db_session import Database

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@ecotrack.com"
DEMO_NAME = "Demo User"

DEFAULT_TIPS: list[dict[str, Any]] = [
    {
        "category": "transport",
        "title": "Bike to Work",
        "description": "Replace car commute with biking 2 days per week",
        "impact": "high",
        "savings": 15.2,
        "difficulty": "medium",
    },
    {
        "category": "transport",
        "title": "Use Public Transit",
        "description": "Take bus or train instead of driving",
        "impact": "medium",
        "savings": 8.5,
        "difficulty": "easy",
    },
    {
        "category": "food",
        "title": "Meat-Free Days",
        "description": "Have 2 plant-based days per week",
        "impact": "high",
        "savings": 12.7,
        "difficulty": "easy",
    },
    {
        "category": "food",
        "title": "Buy Local Produce",
        "description": "Choose locally grown fruits and vegetables",
        "impact": "low",
        "savings": 2.3,
        "difficulty": "easy",
    },
    {
        "category": "energy",
        "title": "LED Light Bulbs",
        "description": "Replace all incandescent bulbs with LEDs",
        "impact": "medium",
        "savings": 5.8,
        "difficulty": "easy",
    },
    {
        "category": "energy",
        "title": "Smart Thermostat",
        "description": "Install and program a smart thermostat",
        "impact": "medium",
        "savings": 7.2,
        "difficulty": "medium",
    },
]


class DatabaseSeeder:
    """Seeds reference data. Re-running is safe: existing rows are skipped."""

    def __init__(
        self,
        database: Optional[Database] = None,
        password_hasher: Optional[PasswordHasher] = None,
        session: Optional[AsyncSession] = None,
    ):
        """
        Args:
            database: Database to open a session on when ``session`` is not given
            password_hasher: Hasher for the demo account password
            session: Optional externally managed session
        """
        if database is None and session is None:
            raise ValueError("Either a database or a session is required")

        self._database = database
        self._session = session
        self._external_session = session is not None
        self._session_context = None
        self.password_hasher = password_hasher or PasswordHasher()

    async def __aenter__(self):
        """Context manager entry."""
        if not self._external_session:
            self._session_context = self._database.session()
            self._session = await self._session_context.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if self._session_context is not None:
            await self._session_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        if not self._session:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    async def seed_all(
        self,
        clear_existing: bool = False,
        demo_password: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Seed tips and, if ``demo_password`` is given, the demo user.

        Args:
            clear_existing: If True, delete existing tips first
            demo_password: Password for the demo account; skipped when None

        Returns:
            Dictionary with seeding statistics
        """
        logger.info("Starting database seeding")
        stats: dict[str, Any] = {"tips": 0, "tips_skipped": 0, "demo_user": False}

        if clear_existing:
            await self.session.execute(delete(TipDBModel))
            logger.info("Cleared existing tips")

        stats["tips"], stats["tips_skipped"] = await self.seed_tips()
        if demo_password:
            stats["demo_user"] = await self.seed_demo_user(demo_password)

        await self.session.commit()
        logger.info(f"Seeding finished: {stats}")
        return stats

    async def seed_tips(self, tips: Optional[list[dict[str, Any]]] = None) -> tuple[int, int]:
        """
        Insert tips that are not present yet.

        Returns:
            Tuple of (created, skipped)
        """
        repo = TipRepository(self.session)
        created = skipped = 0
        for tip in tips or DEFAULT_TIPS:
            if await repo.get_by_title(tip["category"], tip["title"]) is not None:
                skipped += 1
                continue
            await repo.create(**tip)
            created += 1

        logger.info(f"Seeded {created} tips ({skipped} already present)")
        return created, skipped

    async def seed_demo_user(self, password: str) -> bool:
        """
        Create the demo account if it does not exist.

        Returns:
            True if the account was created
        """
        repo = UserRepository(self.session)
        if await repo.get_by_email(DEMO_EMAIL) is not None:
            logger.info("Demo user already exists")
            return False

        await repo.create(
            email=DEMO_EMAIL,
            password_hash=self.password_hasher.hash(password),
            name=DEMO_NAME,
        )
        logger.info(f"Created demo user {DEMO_EMAIL}")
        return True
