"""
Emission calculation.

Multiplies an activity amount by the static emission factor for its
(category, activity type) pair. Unknown pairs yield zero emissions rather
than an error.
"""
import logging
import math
from dataclasses import dataclass
from numbers import Real

from ecotrack.core.exceptions import InputError
from ecotrack.utils.constants import CATEGORY_UNITS, DEFAULT_UNIT, EMISSION_FACTORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissionCalculation:
    """Result of a single emission calculation."""

    emissions: float
    unit: str
    factor: float


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round half up on the scaled value, e.g. 0.125 -> 0.13 and -0.125 -> -0.12.
    """
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale


def get_emission_factor(category: str, activity_type: str) -> float:
    """Factor in kg CO2e per unit, or 0 if the pair is not in the table."""
    return EMISSION_FACTORS.get(category, {}).get(activity_type, 0)


def unit_for_category(category: str) -> str:
    return CATEGORY_UNITS.get(category, DEFAULT_UNIT)


def calculate_emissions(
    category: str, activity_type: str, amount: float
) -> EmissionCalculation:
    """
    Calculate emissions for an activity.

    Args:
        category: Activity category (transport, food, energy)
        activity_type: Activity type within the category
        amount: Quantity in the category unit

    Returns:
        EmissionCalculation with emissions rounded to 2 decimal places

    Raises:
        InputError: If amount is not a finite number
    """
    if isinstance(amount, bool) or not isinstance(amount, Real):
        raise InputError(f"Amount must be a number, got {type(amount).__name__}")
    if not math.isfinite(amount):
        raise InputError("Amount must be a finite number")

    factor = get_emission_factor(category, activity_type)
    if factor == 0 and activity_type not in EMISSION_FACTORS.get(category, {}):
        logger.debug(
            f"No emission factor for {category}/{activity_type}, using 0"
        )

    return EmissionCalculation(
        emissions=round_half_up(amount * factor),
        unit=unit_for_category(category),
        factor=factor,
    )
