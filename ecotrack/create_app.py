"""
FastAPI application factory.

Creates and configures the FastAPI application instance. Shared services
(database, token manager, limiters, insight service) are built here and in
the lifespan handler, then kept on ``app.state`` for dependency injection.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecotrack.api import (
    activities_router,
    auth_router,
    calculations_router,
    factors_router,
    footprint_router,
    goals_router,
    health_router,
    insights_router,
    tips_router,
)
from ecotrack.core.config import get_config
from ecotrack.core.dependencies import enforce_api_rate_limit, record_auth_failure
from ecotrack.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    EcoTrackError,
    InputError,
    NotFoundError,
    StorageError,
)
from ecotrack.core.rate_limit import build_api_limiter, build_auth_limiter
from ecotrack.core.security import build_password_hasher, build_token_manager
from ecotrack.database.base import get_db_url, get_engine_kw
from ecotrack.database.session_manager.db_session import Database
from ecotrack.services.insights.insight_service import InsightService

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    InputError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}

AUTH_PATH_PREFIX = "/api/auth/"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]


def register_routers(app: FastAPI):
    """Register all API routers behind the shared per-IP request limit."""
    rate_limited = [Depends(enforce_api_rate_limit)]
    app.include_router(health_router, dependencies=rate_limited)
    app.include_router(auth_router, dependencies=rate_limited)
    app.include_router(factors_router, dependencies=rate_limited)
    app.include_router(calculations_router, dependencies=rate_limited)
    app.include_router(activities_router, dependencies=rate_limited)
    app.include_router(footprint_router, dependencies=rate_limited)
    app.include_router(goals_router, dependencies=rate_limited)
    app.include_router(tips_router, dependencies=rate_limited)
    app.include_router(insights_router, dependencies=rate_limited)


async def ecotrack_error_handler(request: Request, exc: EcoTrackError):
    """Map application errors to HTTP responses."""
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.url.path}: {exc.message}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    content = {"detail": exc.message}
    if exc.details:
        content["errors"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    logger.error(f"HTTPException occurred: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors."""
    if request.url.path.startswith(AUTH_PATH_PREFIX):
        record_auth_failure(request)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "message": "Validation error",
        },
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(EcoTrackError, ecotrack_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Builds the database handle unless one was already attached, and disposes it on shutdown.
    """
    logger.info("Application startup")
    if getattr(app.state, "database", None) is None:
        async_db_url = get_db_url(app.state.config)
        app.state.database = Database(async_db_url, engine_kw=get_engine_kw(async_db_url))
        logger.info("Initialized database")

    try:
        yield
    finally:
        logger.info("Application shutdown")
        await app.state.database.dispose()


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api_config = config.section("api")

    app = FastAPI(
        title=api_config.get("title", "EcoTrack Carbon Footprint API"),
        description=api_config.get(
            "description", "Track activities, estimate CO2e emissions and follow reduction goals"
        ),
        version=api_config.get("version", "1.0.0"),
        debug=api_config.get("debug", False),
        lifespan=lifespan,
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config
    app.state.database = None
    app.state.password_hasher = build_password_hasher(config)
    app.state.token_manager = build_token_manager(config)
    app.state.limiter = build_api_limiter(config)
    app.state.auth_limiter = build_auth_limiter(config)
    app.state.insight_service = InsightService.from_config(config)

    register_routers(app)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.section("cors").get("origins", DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
