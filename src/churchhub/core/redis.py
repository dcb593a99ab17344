"""Shared Redis connection backing the tenant resolver cache.

Redis is optional. Without it the resolver reads `public.tenants` on every
call, so a missing or unreachable server costs latency, never correctness.
All keys live under the `churchhub:` namespace (see `redis_key`).
"""

from dataclasses import dataclass

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from src.churchhub.core.config import get_settings
from src.churchhub.core.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "churchhub"


def redis_key(*parts: str) -> str:
    """Namespaced key, e.g. redis_key("tenant", "graca") -> "churchhub:tenant:graca"."""
    return ":".join((KEY_PREFIX, *parts))


@dataclass
class _RedisState:
    pool: ConnectionPool | None = None
    client: Redis | None = None
    attempted: bool = False


_state = _RedisState()


async def get_redis() -> Redis | None:
    """The shared client, or None when Redis is not configured or unreachable.

    Connects once per process. A failed attempt is not retried until
    close_redis() or reset_redis_state() runs.
    """
    if _state.client is not None:
        return _state.client
    if _state.attempted:
        return None
    _state.attempted = True

    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis not configured, tenant cache disabled")
        return None

    pool: ConnectionPool | None = None
    client: Redis | None = None
    try:
        pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
            decode_responses=True,
        )
        client = Redis(connection_pool=pool)
        await client.ping()  # type: ignore[misc]
    except (RedisError, OSError, ValueError) as e:
        logger.warning("Redis unreachable, tenant cache disabled", error=str(e))
        if client is not None:
            await client.aclose()
        if pool is not None:
            await pool.disconnect()
        return None

    _state.pool, _state.client = pool, client
    logger.info("Redis connected", max_connections=settings.redis_pool_size)
    return client


async def ping_redis() -> str:
    """Cache backend status for /health: healthy, not_configured or unhealthy: <reason>."""
    client = await get_redis()
    if client is None:
        return "unhealthy: unreachable" if get_settings().redis_url else "not_configured"
    try:
        await client.ping()  # type: ignore[misc]
    except (RedisError, OSError) as e:
        return f"unhealthy: {e}"
    return "healthy"


async def close_redis() -> None:
    """Close the client and its pool. Called from the lifespan on shutdown."""
    if _state.client is not None:
        await _state.client.aclose()
        logger.info("Redis connection closed")
    if _state.pool is not None:
        await _state.pool.disconnect()
    reset_redis_state()


def reset_redis_state() -> None:
    """Forget the cached client so the next get_redis() connects again."""
    _state.pool = None
    _state.client = None
    _state.attempted = False
