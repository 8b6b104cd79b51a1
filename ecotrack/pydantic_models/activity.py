"""
Pydantic models for activities and carbon entries.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ActivityPydModel(BaseModel):
    """Model for activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    category: str = Field(..., examples=["transport"])
    activity_type: str = Field(..., examples=["car"])
    amount: float = Field(..., examples=[10])
    unit: str = Field(..., examples=["miles"])
    description: Optional[str] = None
    occurred_at: datetime
    created_at: datetime


class CarbonEntryPydModel(BaseModel):
    """Model for carbon entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    activity_id: Optional[UUID] = None
    category: str
    emissions: float = Field(..., description="kg CO2e", examples=[4.04])
    occurred_at: datetime


class ActivityListResponse(BaseModel):
    activities: list[ActivityPydModel]
    page: int
    limit: int
