"""
Password hashing and JWT access tokens.

Both helpers are built once per application from the ``[auth]`` config section
and kept on ``app.state``.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext

from ecotrack.core.config import Config
from ecotrack.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_HOURS = 24
DEFAULT_BCRYPT_ROUNDS = 12


class PasswordHasher:
    """bcrypt password hashing via passlib."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by an access token."""

    user_id: UUID
    email: str


class TokenManager:
    """Issues and verifies signed JWT access tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expire_hours: float = DEFAULT_EXPIRE_HOURS,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_delta = timedelta(hours=expire_hours)

    def create_access_token(
        self, user_id: UUID, email: str, expires_delta: Optional[timedelta] = None
    ) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or self.expire_delta)
        to_encode: dict[str, Any] = {
            "user_id": str(user_id),
            "email": email,
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Verify a token and return its claims.

        Raises:
            AuthenticationError: If the token has expired
            AuthorizationError: If the signature is bad or required claims are missing
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise AuthenticationError("Token expired, please login again") from e
        except JWTError as e:
            logger.warning(f"Rejected access token: {e}")
            raise AuthorizationError("Invalid token") from e

        user_id = payload.get("user_id")
        email = payload.get("email")
        if not user_id or not email:
            raise AuthorizationError("Malformed token")

        try:
            return TokenPayload(user_id=UUID(str(user_id)), email=email)
        except ValueError as e:
            raise AuthorizationError("Malformed token") from e


def build_password_hasher(config: Config) -> PasswordHasher:
    auth = config.section("auth")
    return PasswordHasher(rounds=int(auth.get("bcrypt_rounds", DEFAULT_BCRYPT_ROUNDS)))


def build_token_manager(config: Config) -> TokenManager:
    auth = config.section("auth")
    return TokenManager(
        secret=auth.get("jwt_secret", ""),
        algorithm=auth.get("jwt_algorithm", DEFAULT_ALGORITHM),
        expire_hours=float(auth.get("token_expire_hours", DEFAULT_EXPIRE_HOURS)),
    )
