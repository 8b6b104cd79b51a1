"""
AI Insight Service.

Asks a Gemini model for personalised reduction insights and emission trend
predictions. Every provider failure (no API key, timeout, API error,
unparseable response) is recovered locally with a deterministic rule-based
fallback; callers never see the error.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import google.generativeai as genai
from google.generativeai import types
from pydantic import ValidationError

from ecotrack.core.config import Config
from ecotrack.core.exceptions import ExternalServiceError
from ecotrack.pydantic_models.insight import InsightPydModel, PredictionPydModel
from ecotrack.utils.constants import Category

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 15.0
MAX_PROMPT_ACTIVITIES = 25
MAX_INSIGHTS = 3

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"

CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")

INSIGHTS_PROMPT = """
You are an expert environmental scientist and carbon footprint analyst.
Analyze the following carbon footprint data and provide 3 personalized, actionable insights.

USER CARBON DATA:
{activities}

Please provide insights in this exact JSON format:
{{
  "insights": [
    {{
      "title": "Short, impactful title (max 6 words)",
      "description": "Detailed explanation with specific numbers and data from their activities. Be encouraging and practical.",
      "impact": "High/Medium/Low",
      "category": "transport/food/energy",
      "savingsPotential": "Estimated CO2 savings if action is taken",
      "actionSteps": ["Step 1", "Step 2", "Step 3"]
    }}
  ]
}}

Focus on:
1. Identifying the biggest emission sources
2. Spotting patterns and trends in their behavior
3. Providing practical, achievable recommendations
4. Estimating potential carbon savings
5. Being encouraging and supportive

Make the insights personalized to their actual data. If they have high transport emissions, focus on transport solutions.
If they eat a lot of meat, focus on food choices. Be specific and data-driven.
"""

PREDICTION_PROMPT = """
Based on this historical monthly carbon emission data (kg CO2e), predict the trend for the next {months} months:
{history}

Return as JSON: {{"prediction": string, "confidence": "High/Medium/Low", "recommendation": string}}
"""


class GenerativeModel(Protocol):
    async def generate_content_async(self, contents: Any, **kwargs: Any) -> Any:
        ...


@dataclass
class InsightReport:
    insights: list[InsightPydModel] = field(default_factory=list)
    source: str = SOURCE_FALLBACK


@dataclass
class PredictionReport:
    prediction: PredictionPydModel
    source: str = SOURCE_FALLBACK


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model sometimes wraps JSON in."""
    return CODE_FENCE.sub("", text).strip()


def parse_insights(text: str) -> list[InsightPydModel]:
    """
    Parse a model response into insights.

    Accepts ``{"insights": [...]}`` or a bare list.

    Raises:
        ExternalServiceError: If the text is not valid JSON or an insight is malformed
    """
    try:
        data = json.loads(strip_code_fences(text))
        items = data.get("insights") if isinstance(data, dict) else data
        if not isinstance(items, list) or not items:
            raise ExternalServiceError("AI response contained no insights")
        return [InsightPydModel.model_validate(item) for item in items[:MAX_INSIGHTS]]
    except (json.JSONDecodeError, ValidationError) as e:
        raise ExternalServiceError(f"Malformed AI response: {e}") from e


def parse_prediction(text: str) -> PredictionPydModel:
    """
    Raises:
        ExternalServiceError: If the text is not a valid prediction object
    """
    try:
        return PredictionPydModel.model_validate(json.loads(strip_code_fences(text)))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ExternalServiceError(f"Malformed AI response: {e}") from e


def fallback_insights(activities: list[dict[str, Any]]) -> list[InsightPydModel]:
    """
    Rule-based insights from activity counts per category.
    """
    counts = {
        category: sum(1 for a in activities if a.get("category") == category)
        for category in (Category.TRANSPORT, Category.FOOD, Category.ENERGY)
    }
    transport_count = counts[Category.TRANSPORT]
    food_count = counts[Category.FOOD]

    insights = []
    if transport_count > food_count and transport_count > counts[Category.ENERGY]:
        insights.append(
            InsightPydModel(
                title="Transport is Your Top Emitter",
                description=(
                    f"Based on your {transport_count} transport activities, this category "
                    "contributes the most to your carbon footprint. Consider carpooling "
                    "or using public transportation."
                ),
                impact="High",
                category=Category.TRANSPORT,
                savings_potential="Up to 30% reduction possible",
                action_steps=[
                    "Try public transport 2 days/week",
                    "Explore carpooling options",
                    "Combine errands to reduce trips",
                ],
            )
        )

    if food_count > 0:
        insights.append(
            InsightPydModel(
                title="Food Choices Matter",
                description=(
                    f"Your {food_count} food-related activities show dietary impact. "
                    "Plant-based meals can significantly reduce emissions."
                ),
                impact="Medium",
                category=Category.FOOD,
                savings_potential="1-2 kg CO₂ per meal",
                action_steps=[
                    "Try meat-free Mondays",
                    "Choose local produce",
                    "Reduce food waste",
                ],
            )
        )

    insights.append(
        InsightPydModel(
            title="Track Consistently for Better Insights",
            description=(
                "Regular tracking helps identify patterns. Keep logging your "
                "activities for more personalized recommendations."
            ),
            impact="Low",
            category="general",
            savings_potential="Varies with consistency",
            action_steps=[
                "Log activities daily",
                "Set weekly reminders",
                "Review trends monthly",
            ],
        )
    )

    return insights[:MAX_INSIGHTS]


def fallback_prediction(monthly_totals: list[float], months: int) -> PredictionPydModel:
    """Describe the trend from the last two monthly totals."""
    if len(monthly_totals) < 2:
        return PredictionPydModel(
            prediction="Not enough history to predict a trend yet.",
            confidence="Low",
            recommendation="Keep logging activities for at least two months.",
        )

    previous, latest = monthly_totals[-2], monthly_totals[-1]
    if latest > previous:
        direction = "rise"
        recommendation = "Focus on your highest-emitting category to reverse the increase."
    elif latest < previous:
        direction = "fall"
        recommendation = "Keep up the habits that brought your emissions down."
    else:
        direction = "stay flat"
        recommendation = "Pick one category and set a reduction goal."

    return PredictionPydModel(
        prediction=(
            f"Emissions are likely to {direction} over the next {months} months "
            f"(last month {latest:.2f} kg CO2e vs {previous:.2f} kg CO2e)."
        ),
        confidence="Medium" if len(monthly_totals) >= 3 else "Low",
        recommendation=recommendation,
    )


class InsightService:
    """
    Gemini-backed insight generator with a deterministic fallback.

    Without an API key (or an injected model) the service always uses the fallback.
    """

    def __init__(
        self,
        model: Optional[GenerativeModel] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_activities: int = MAX_PROMPT_ACTIVITIES,
        temperature: float = 0.3,
    ):
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_activities = max_activities
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: Config) -> "InsightService":
        settings = config.section("insights")
        api_key = settings.get("api_key")
        model = None
        if api_key:
            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(settings.get("model", DEFAULT_MODEL))
        else:
            logger.warning("No Gemini API key configured, insights will use the fallback")

        return cls(
            model=model,
            timeout_seconds=float(settings.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
            max_activities=int(settings.get("max_activities", MAX_PROMPT_ACTIVITIES)),
            temperature=float(settings.get("temperature", 0.3)),
        )

    async def _generate(self, prompt: str) -> str:
        """
        Raises:
            ExternalServiceError: On timeout, provider error or empty response
        """
        if self.model is None:
            raise ExternalServiceError("No AI model configured")

        try:
            response = await asyncio.wait_for(
                self.model.generate_content_async(
                    prompt,
                    generation_config=types.GenerationConfig(
                        temperature=self.temperature,
                        top_p=0.9,
                    ),
                ),
                timeout=self.timeout_seconds,
            )
            text = response.text
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"AI request timed out after {self.timeout_seconds}s"
            ) from e
        except Exception as e:
            raise ExternalServiceError(f"AI request failed: {e}") from e

        if not text:
            raise ExternalServiceError("AI response was empty")
        return text

    async def generate_insights(self, activities: list[dict[str, Any]]) -> InsightReport:
        """
        Produce up to three insights for the given activities.

        Args:
            activities: Activity dicts, newest first (category, activity_type, amount, ...)
        """
        prompt = INSIGHTS_PROMPT.format(
            activities=json.dumps(activities[: self.max_activities], indent=2, default=str)
        )
        try:
            insights = parse_insights(await self._generate(prompt))
            return InsightReport(insights=insights, source=SOURCE_AI)
        except ExternalServiceError as e:
            logger.warning(f"Falling back to rule-based insights: {e.message}")
            return InsightReport(insights=fallback_insights(activities), source=SOURCE_FALLBACK)

    async def predict_emissions(
        self, monthly_totals: list[float], months: int = 6
    ) -> PredictionReport:
        """
        Predict the emission trend from monthly totals, oldest first.
        """
        prompt = PREDICTION_PROMPT.format(months=months, history=json.dumps(monthly_totals))
        try:
            prediction = parse_prediction(await self._generate(prompt))
            return PredictionReport(prediction=prediction, source=SOURCE_AI)
        except ExternalServiceError as e:
            logger.warning(f"Falling back to rule-based prediction: {e.message}")
            return PredictionReport(
                prediction=fallback_prediction(monthly_totals, months),
                source=SOURCE_FALLBACK,
            )
