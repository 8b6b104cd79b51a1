"""
Pydantic models for AI insights and emission predictions.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ecotrack.utils.constants import TimeframeEnum

ImpactLevel = Literal["High", "Medium", "Low"]


def _capitalize_level(value):
    if isinstance(value, str):
        return value.strip().capitalize()
    return value


class InsightPydModel(BaseModel):
    """A single reduction insight."""

    title: str = Field(..., min_length=1, examples=["Transport is Your Top Emitter"])
    description: str = Field(..., min_length=1)
    impact: ImpactLevel = Field(..., description="Expected impact", examples=["High"])
    category: str = Field(..., examples=["transport"])
    savings_potential: str = Field(
        ...,
        validation_alias=AliasChoices("savings_potential", "savingsPotential"),
        examples=["Up to 30% reduction possible"],
    )
    action_steps: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("action_steps", "actionSteps"),
    )

    @field_validator("impact", mode="before")
    @classmethod
    def normalize_impact(cls, value):
        return _capitalize_level(value)


class InsightRequest(BaseModel):
    """Request model for generating insights."""

    timeframe: TimeframeEnum = Field(
        TimeframeEnum.MONTH,
        description="How far back to look for activities",
        examples=["30d"],
    )


class InsightResponse(BaseModel):
    insights: list[InsightPydModel]
    source: Literal["ai", "fallback"] = Field(
        ..., description="Whether the insights came from the AI model or the rule-based fallback"
    )


class PredictionPydModel(BaseModel):
    """Emission trend prediction."""

    prediction: str
    confidence: ImpactLevel
    recommendation: str

    @field_validator("confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, value):
        return _capitalize_level(value)


class PredictionRequest(BaseModel):
    months: int = Field(6, ge=1, le=24, description="How many months ahead to predict")
    history_months: int = Field(
        6, ge=2, le=24, description="How many past months of totals to base the prediction on"
    )


class PredictionResponse(BaseModel):
    prediction: PredictionPydModel
    monthly_totals: list[float]
    source: Literal["ai", "fallback"]
