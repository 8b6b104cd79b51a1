"""
Pydantic models for footprint summaries.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ecotrack.pydantic_models.activity import CarbonEntryPydModel


class FootprintSummaryPydModel(BaseModel):
    """Model for footprint summary response."""

    summary: dict[str, float] = Field(
        ...,
        description="kg CO2e per category",
        examples=[{"transport": 12.5, "food": 54.0, "energy": 0.0}],
    )
    total: float = Field(..., description="kg CO2e over the whole window", examples=[66.5])
    total_entries: int
    recent_entries: list[CarbonEntryPydModel]
    window_start: datetime = Field(..., description="Inclusive window start (UTC)")
    window_end: datetime = Field(..., description="Exclusive window end (UTC)")
