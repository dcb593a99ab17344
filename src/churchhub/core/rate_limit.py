"""Rate limiting for the public write endpoints (registration, login).

Uses Redis for distributed counters when REDIS_URL is configured, and
in-memory storage (per-process) otherwise.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.churchhub.core.config import get_settings
from src.churchhub.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Key on client IP only.

    Never include user-controlled headers (such as X-Church-Subdomain):
    rotating them would create unlimited new buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create rate limiter with appropriate storage backend.

    Disabled in testing environment.
    """
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Built at import time for the route decorators
limiter = create_limiter()
