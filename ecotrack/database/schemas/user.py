"""
User SQLAlchemy model.
"""
import uuid

from sqlalchemy import Column, DateTime, String, Uuid

from ecotrack.database import Base
from ecotrack.utils.datetime_utils import utc_now


class UserDBModel(Base):
    """Registered user account."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    email = Column(
        String(254),
        nullable=False,
        unique=True,
        index=True,
        comment="Lower-cased login email",
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    name = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
