"""
Application constants.
"""
from enum import Enum


class ConfigFile:
    """Configuration file names."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class Category:
    """Activity category constants."""
    TRANSPORT = "transport"
    FOOD = "food"
    ENERGY = "energy"


class CategoryEnum(str, Enum):
    """Activity category enum for API parameters."""
    TRANSPORT = "transport"
    FOOD = "food"
    ENERGY = "energy"


class ImpactEnum(str, Enum):
    """Impact level of a tip."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DifficultyEnum(str, Enum):
    """Difficulty level of a tip."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TimeframeEnum(str, Enum):
    """Look-back windows accepted by the insights endpoint."""
    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"

    @property
    def days(self) -> int:
        return int(self.value.rstrip("d"))


# kg CO2e per unit of activity
EMISSION_FACTORS: dict[str, dict[str, float]] = {
    Category.TRANSPORT: {
        "car": 0.404,
        "electric_car": 0.1,
        "bus": 0.17,
        "train": 0.14,
        "subway": 0.15,
        "bicycle": 0,
        "walking": 0,
        "motorcycle": 0.24,
        "flight": 0.254,
        "carpool": 0.202,
    },
    Category.FOOD: {
        "beef": 27.0,
        "lamb": 39.2,
        "cheese": 13.5,
        "pork": 12.1,
        "chicken": 6.9,
        "fish": 6.1,
        "eggs": 4.8,
        "milk": 3.2,
        "vegetables": 2.0,
        "fruits": 1.1,
        "grains": 1.4,
        "nuts": 0.3,
        "tofu": 2.0,
        "lentils": 0.9,
    },
    Category.ENERGY: {
        "electricity": 0.5,
        "natural_gas": 5.3,
        "heating_oil": 10.1,
        "propane": 5.8,
        "solar": 0.05,
        "wind": 0.01,
        "geothermal": 0.02,
    },
}

CATEGORY_UNITS: dict[str, str] = {
    Category.TRANSPORT: "miles",
    Category.FOOD: "kg",
    Category.ENERGY: "kWh",
}

DEFAULT_UNIT = "unit"
PUBLIC_EMISSIONS_UNIT = "kg CO2"

# Free-text fields are truncated to this many characters after sanitizing
MAX_TEXT_LENGTH = 255
MAX_EMAIL_LENGTH = 254

SUMMARY_WINDOW_DAYS = 30
RECENT_ENTRIES_LIMIT = 10

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "12345678",
        "qwerty",
        "letmein",
        "welcome",
        "admin",
        "password1",
        "123456789",
        "1234567",
        "123123",
    }
)
