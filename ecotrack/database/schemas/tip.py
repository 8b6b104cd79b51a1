"""
Tip SQLAlchemy model.
"""
import uuid

from sqlalchemy import Column, DateTime, Float, Index, String, Text, UniqueConstraint, Uuid

from ecotrack.database import Base
from ecotrack.utils.datetime_utils import utc_now


class TipDBModel(Base):
    """Emission reduction tip shown to every user."""

    __tablename__ = "tips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    category = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    impact = Column(String(20), nullable=False, comment="low, medium or high")

    savings = Column(
        Float,
        nullable=False,
        comment="Estimated savings in kg CO2e",
    )

    difficulty = Column(String(20), nullable=False, comment="easy, medium or hard")

    created_at = Column(DateTime, default=utc_now, nullable=False)

    __table_args__ = (
        # Seeding is idempotent on (category, title)
        UniqueConstraint("category", "title", name="uq_tips_category_title"),
        Index("ix_tips_category_savings", "category", "savings"),
    )
