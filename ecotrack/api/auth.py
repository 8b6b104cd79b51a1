"""
Authentication API router.

Register and log in. Failed attempts count against the per-IP auth limit;
successful ones do not.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import (
    enforce_auth_rate_limit,
    get_db_session,
    get_password_hasher,
    get_token_manager,
)
from ecotrack.core.exceptions import EcoTrackError
from ecotrack.core.security import PasswordHasher, TokenManager
from ecotrack.pydantic_models.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserPydModel,
)
from ecotrack.services.auth.user_service import UserService

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
)

logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    client_key: str = Depends(enforce_auth_rate_limit),
    session: AsyncSession = Depends(get_db_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """
    Create an account and return an access token.

    Example:
        ```
        POST /api/auth/register
        {"email": "jane@example.com", "password": "Sup3rSecret", "name": "Jane"}
        ```
    """
    service = UserService(session, password_hasher)
    try:
        user = await service.register(payload.email, payload.password, payload.name)
    except EcoTrackError:
        request.app.state.auth_limiter.register_failure(client_key)
        raise

    return AuthResponse(
        message="User created successfully",
        token=token_manager.create_access_token(user.id, user.email),
        user=UserPydModel.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    client_key: str = Depends(enforce_auth_rate_limit),
    session: AsyncSession = Depends(get_db_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """Check credentials and return an access token."""
    service = UserService(session, password_hasher)
    try:
        user = await service.authenticate(payload.email, payload.password)
    except EcoTrackError:
        request.app.state.auth_limiter.register_failure(client_key)
        raise

    logger.info(f"User {user.id} logged in")
    return AuthResponse(
        message="Login successful",
        token=token_manager.create_access_token(user.id, user.email),
        user=UserPydModel.model_validate(user),
    )
