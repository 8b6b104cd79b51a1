"""
Activity and carbon entry SQLAlchemy models.

An activity is what the user logged; its carbon entry is the emission derived
from it at the time it was recorded. Entries are never recomputed, so past
reports stay stable when emission factors change.
"""
import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text, Uuid

from ecotrack.database import Base
from ecotrack.utils.datetime_utils import utc_now


class ActivityDBModel(Base):
    """A single logged activity (a car trip, a meal, an energy bill)."""

    __tablename__ = "activities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the activity",
    )

    category = Column(
        String(50),
        nullable=False,
        comment="Activity category (transport, food, energy)",
    )

    activity_type = Column(
        String(100),
        nullable=False,
        comment="Activity type within the category (e.g., car, beef, electricity)",
    )

    amount = Column(
        Float,
        nullable=False,
        comment="Quantity in the category unit",
    )

    unit = Column(
        String(20),
        nullable=False,
        comment="Unit of amount (miles, kg, kWh)",
    )

    description = Column(Text, nullable=True)

    occurred_at = Column(
        DateTime,
        nullable=False,
        default=utc_now,
        comment="When the activity happened",
    )

    # Timestamps
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    __table_args__ = (
        # Activity history listing, newest first
        Index("ix_activities_user_occurred", "user_id", "occurred_at"),
        # Category filter on the history listing
        Index("ix_activities_user_category_occurred", "user_id", "category", "occurred_at"),
    )

    def __repr__(self):
        return f"<Activity {self.category}/{self.activity_type} {self.amount} {self.unit}>"


class CarbonEntryDBModel(Base):
    """Emission derived from an activity, in kg CO2e."""

    __tablename__ = "carbon_entries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the entry",
    )

    activity_id = Column(
        Uuid,
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
        comment="Activity the entry was derived from",
    )

    category = Column(String(50), nullable=False)

    emissions = Column(
        Float,
        nullable=False,
        comment="Emissions in kg CO2e, rounded to 2 decimal places",
    )

    occurred_at = Column(DateTime, nullable=False, default=utc_now)

    created_at = Column(DateTime, default=utc_now, nullable=False)

    __table_args__ = (
        # Footprint window queries
        Index("ix_carbon_entries_user_occurred", "user_id", "occurred_at"),
    )

    def __repr__(self):
        return f"<CarbonEntry {self.category} {self.emissions} kg>"
