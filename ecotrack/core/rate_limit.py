"""
Request rate limiting.

Two limiters are built per application, both on a ``limits`` moving window:

* an ``ApiRequestLimiter`` holding one per-IP request budget shared by every route
* an ``AuthAttemptLimiter`` that counts only failed register/login attempts
"""
import logging

from limits import parse
from limits.storage import storage_from_string
from limits.strategies import MovingWindowRateLimiter

from ecotrack.core.config import Config

logger = logging.getLogger(__name__)

DEFAULT_API_LIMIT = "100 per 15 minutes"
DEFAULT_AUTH_LIMIT = "10 per 15 minutes"
DEFAULT_STORAGE_URI = "memory://"


class MovingWindowLimiter:
    def __init__(
        self,
        limit: str,
        namespace: str,
        storage_uri: str = DEFAULT_STORAGE_URI,
        enabled: bool = True,
    ):
        self.item = parse(limit)
        self.namespace = namespace
        self.enabled = enabled
        self._strategy = MovingWindowRateLimiter(storage_from_string(storage_uri))


class ApiRequestLimiter(MovingWindowLimiter):
    """
    General per-client request limit.

    Every request counts, whichever route it hits.
    """

    def __init__(
        self,
        limit: str = DEFAULT_API_LIMIT,
        storage_uri: str = DEFAULT_STORAGE_URI,
        enabled: bool = True,
    ):
        super().__init__(limit, "api", storage_uri, enabled)

    def allow(self, client_key: str) -> bool:
        """Record a request and tell whether it is within the limit."""
        if not self.enabled:
            return True
        return self._strategy.hit(self.item, self.namespace, client_key)


class AuthAttemptLimiter(MovingWindowLimiter):
    """
    Per-client limit on failed authentication attempts.

    Successful attempts are never counted; once the limit is reached the
    client is blocked until old failures slide out of the window.
    """

    def __init__(
        self,
        limit: str = DEFAULT_AUTH_LIMIT,
        storage_uri: str = DEFAULT_STORAGE_URI,
        enabled: bool = True,
    ):
        super().__init__(limit, "auth", storage_uri, enabled)

    def is_blocked(self, client_key: str) -> bool:
        if not self.enabled:
            return False
        return not self._strategy.test(self.item, self.namespace, client_key)

    def register_failure(self, client_key: str):
        if self.enabled:
            self._strategy.hit(self.item, self.namespace, client_key)
            logger.info(f"Failed authentication attempt from {client_key}")


def build_api_limiter(config: Config) -> ApiRequestLimiter:
    rate_limit = config.section("rate_limit")
    return ApiRequestLimiter(
        limit=rate_limit.get("api_limit", DEFAULT_API_LIMIT),
        storage_uri=rate_limit.get("storage_uri", DEFAULT_STORAGE_URI),
        enabled=rate_limit.get("enabled", True),
    )


def build_auth_limiter(config: Config) -> AuthAttemptLimiter:
    rate_limit = config.section("rate_limit")
    return AuthAttemptLimiter(
        limit=rate_limit.get("auth_limit", DEFAULT_AUTH_LIMIT),
        storage_uri=rate_limit.get("storage_uri", DEFAULT_STORAGE_URI),
        enabled=rate_limit.get("enabled", True),
    )
