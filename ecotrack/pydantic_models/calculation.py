"""
Pydantic models for emission calculations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ecotrack.pydantic_models.activity import ActivityPydModel, CarbonEntryPydModel
from ecotrack.utils.constants import CategoryEnum


class EmissionCalculationRequest(BaseModel):
    """Request model for calculating emissions without storing anything."""

    category: CategoryEnum = Field(
        ..., description="Activity category", examples=["transport"]
    )
    type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Activity type within the category; unknown types yield 0",
        examples=["car"],
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Quantity in the category unit (miles, kg or kWh)",
        examples=[10],
    )


class RecordActivityRequest(EmissionCalculationRequest):
    """Request model for recording an activity."""

    description: Optional[str] = Field(
        None, max_length=1000, examples=["Commute to the office"]
    )
    date: Optional[datetime] = Field(
        None,
        description="When the activity happened; defaults to now",
        examples=["2025-11-24T08:30:00Z"],
    )


class PublicCalculationResponse(BaseModel):
    emissions: float = Field(..., description="kg CO2e, rounded to 2 decimals", examples=[4.04])
    unit: str = Field(..., examples=["kg CO2"])
    category: CategoryEnum
    type: str
    amount: float


class RecordActivityResponse(BaseModel):
    emissions: float = Field(..., description="kg CO2e, rounded to 2 decimals", examples=[4.04])
    activity: ActivityPydModel
    carbon_entry: CarbonEntryPydModel


class EmissionFactorsResponse(BaseModel):
    emission_factors: dict[str, dict[str, float]]
    units: dict[str, str]
