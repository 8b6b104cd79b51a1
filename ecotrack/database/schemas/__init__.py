"""
SQLAlchemy database models (schemas).
"""
from ecotrack.database.schemas.activity import ActivityDBModel, CarbonEntryDBModel
from ecotrack.database.schemas.goal import GoalDBModel
from ecotrack.database.schemas.tip import TipDBModel
from ecotrack.database.schemas.user import UserDBModel

__all__ = [
    "ActivityDBModel",
    "CarbonEntryDBModel",
    "GoalDBModel",
    "TipDBModel",
    "UserDBModel",
]
