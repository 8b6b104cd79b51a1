"""
Main FastAPI application entry point.
"""
import logging
import os

import uvicorn

from ecotrack.create_app import get_app
from ecotrack.utils.constants import ConfigFile

app = get_app(os.environ.get("ECOTRACK_CONFIG", ConfigFile.DEVELOPMENT))


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "EcoTrack Carbon Footprint API",
        "version": app.version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    try:
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=int(os.environ.get("PORT", 8000)),
            log_level="info",
            loop="asyncio",
        )
    except Exception as e:
        logging.error(f"Error running FastAPI: {e}")
        raise
