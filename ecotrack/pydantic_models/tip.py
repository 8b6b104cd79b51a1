"""
Pydantic models for reduction tips.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ecotrack.utils.constants import CategoryEnum, DifficultyEnum, ImpactEnum


class TipPydModel(BaseModel):
    """Model for tip response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: CategoryEnum
    title: str = Field(..., examples=["Bike to Work"])
    description: str
    impact: ImpactEnum
    savings: float = Field(..., description="Estimated savings in kg CO2e", examples=[15.2])
    difficulty: DifficultyEnum


class TipListResponse(BaseModel):
    tips: list[TipPydModel]
