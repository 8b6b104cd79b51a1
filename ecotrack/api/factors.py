"""
Emission Factors API router.

Read-only view of the static factor table.
"""

from fastapi import APIRouter

from ecotrack.pydantic_models.calculation import EmissionFactorsResponse
from ecotrack.utils.constants import CATEGORY_UNITS, EMISSION_FACTORS

router = APIRouter(
    prefix="/api",
    tags=["Emission Factors"],
)


@router.get("/emission-factors", response_model=EmissionFactorsResponse)
async def list_emission_factors():
    """Emission factors in kg CO2e per unit, by category and activity type."""
    return EmissionFactorsResponse(emission_factors=EMISSION_FACTORS, units=CATEGORY_UNITS)
