"""
Pydantic models for goals and goal progress.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GoalCreate(BaseModel):
    """Model for creating a goal."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Cut commute emissions"])
    description: Optional[str] = Field(None, max_length=1000)
    target_emissions: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Emission ceiling in kg CO2e",
        examples=[50],
    )
    deadline: Optional[date] = Field(None, examples=["2025-12-31"])


class GoalProgressPydModel(BaseModel):
    """Derived goal progress."""

    current_emissions: float = Field(..., description="kg CO2e since the goal was created")
    percent: int = Field(..., ge=0, le=100)
    days_remaining: Optional[int] = None
    is_overdue: bool


class GoalPydModel(BaseModel):
    """Model for goal response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    target_emissions: float
    deadline: Optional[date] = None
    created_at: datetime
    progress: Optional[GoalProgressPydModel] = None


class GoalListResponse(BaseModel):
    goals: list[GoalPydModel]


class GoalCreateResponse(BaseModel):
    goal: GoalPydModel
    message: str = "Goal created successfully"
