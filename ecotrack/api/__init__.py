"""
API routers module.
"""
from ecotrack.api.activities import router as activities_router
from ecotrack.api.auth import router as auth_router
from ecotrack.api.calculations import router as calculations_router
from ecotrack.api.factors import router as factors_router
from ecotrack.api.footprint import router as footprint_router
from ecotrack.api.goals import router as goals_router
from ecotrack.api.health import router as health_router
from ecotrack.api.insights import router as insights_router
from ecotrack.api.tips import router as tips_router

__all__ = [
    "activities_router",
    "auth_router",
    "calculations_router",
    "factors_router",
    "footprint_router",
    "goals_router",
    "health_router",
    "insights_router",
    "tips_router",
]
