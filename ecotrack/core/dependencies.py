"""
FastAPI dependencies.

Everything here reads shared handles from ``request.app.state``; nothing is
held at module level.
"""
import logging
from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.exceptions import AuthenticationError
from ecotrack.core.rate_limit import ApiRequestLimiter, AuthAttemptLimiter
from ecotrack.core.security import PasswordHasher, TokenManager, TokenPayload
from ecotrack.database.session_manager.db_session import Database
from ecotrack.database.session_manager.exceptions import DatabaseNotInitialized
from ecotrack.services.insights.insight_service import InsightService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotInitialized("Database is not initialized")
    return database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the duration of a request."""
    async with database.session() as session:
        yield session


def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.token_manager


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_insight_service(request: Request) -> InsightService:
    return request.app.state.insight_service


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_manager: TokenManager = Depends(get_token_manager),
) -> TokenPayload:
    """
    Verify the bearer token on the request.

    Raises:
        AuthenticationError: If no token is supplied or it has expired
        AuthorizationError: If the token is invalid or malformed
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return token_manager.decode(credentials.credentials)


def get_current_user_id(token: TokenPayload = Depends(get_current_token)) -> UUID:
    return token.user_id


def enforce_auth_rate_limit(request: Request) -> str:
    """
    Reject the request with 429 if the client has too many failed auth attempts.

    Returns:
        The client key, so the endpoint can record a failure against it
    """
    limiter: AuthAttemptLimiter = request.app.state.auth_limiter
    client_key = get_remote_address(request)
    if limiter.is_blocked(client_key):
        logger.warning(f"Blocked authentication attempt from {client_key}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts from this IP, please try again after 15 minutes.",
        )
    return client_key


def enforce_api_rate_limit(request: Request):
    """Count the request against the client's general budget, 429 once it is spent."""
    limiter: ApiRequestLimiter = request.app.state.limiter
    client_key = get_remote_address(request)
    if not limiter.allow(client_key):
        logger.warning(f"Rate limit exceeded for {client_key} on {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests from this IP, please try again later.",
        )


def record_auth_failure(request: Request):
    """Count a rejected register/login request against the client's auth budget."""
    limiter: AuthAttemptLimiter = request.app.state.auth_limiter
    limiter.register_failure(get_remote_address(request))
