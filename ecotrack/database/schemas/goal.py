"""
Goal SQLAlchemy model.

Progress is not stored; it is computed from carbon entries on every read.
"""
import uuid

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Index, String, Text, Uuid

from ecotrack.database import Base
from ecotrack.utils.datetime_utils import utc_now


class GoalDBModel(Base):
    """A user's emission ceiling with an optional deadline."""

    __tablename__ = "goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    target_emissions = Column(
        Float,
        nullable=False,
        comment="Emission ceiling in kg CO2e",
    )

    deadline = Column(Date, nullable=True)

    created_at = Column(
        DateTime,
        default=utc_now,
        nullable=False,
        comment="Start of the window progress is measured over",
    )
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    __table_args__ = (
        Index("ix_goals_user_created", "user_id", "created_at"),
    )
