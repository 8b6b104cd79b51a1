"""
Health check API router.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ecotrack.core.dependencies import get_database
from ecotrack.database.session_manager.db_session import Database
from ecotrack.utils.datetime_utils import utc_now

router = APIRouter(
    prefix="/api",
    tags=["Health"],
)

logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """Service health check."""
    return {
        "status": "OK",
        "service": "ecotrack-api",
        "timestamp": utc_now().isoformat(),
    }


@router.get("/db-health")
async def db_health_check(database: Database = Depends(get_database)):
    """Run SELECT 1 against the database."""
    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "ERROR", "database": "unreachable", "detail": str(e)},
        )

    return {
        "status": "OK",
        "database": "connected",
        "timestamp": utc_now().isoformat(),
    }
