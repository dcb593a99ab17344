"""Tenant lookup cache with Redis backend and graceful fallback.

Only active churches are cached. Entries expire after a short TTL and
are deleted explicitly when a church is deactivated or dropped.
"""

import json

from src.churchhub.core.config import get_settings
from src.churchhub.core.logging import get_logger
from src.churchhub.core.redis import get_redis, redis_key
from src.churchhub.models.public import Tenant

logger = get_logger(__name__)

def tenant_cache_key(subdomain: str) -> str:
    return redis_key("tenant", subdomain)


async def get_cached_tenant(subdomain: str) -> Tenant | None:
    """Look up a cached church.

    Returns:
        The cached Tenant, or None on a miss or when Redis is unavailable
    """
    redis = await get_redis()
    if not redis:
        return None
    try:
        raw = await redis.get(tenant_cache_key(subdomain))
    except Exception as e:
        logger.warning("Tenant cache read failed", subdomain=subdomain, error=str(e))
        return None
    if raw is None:
        return None
    return Tenant.model_validate(json.loads(raw))


async def cache_tenant(tenant: Tenant) -> bool:
    """Store a church under its subdomain.

    Returns:
        True if stored, False if Redis unavailable
    """
    redis = await get_redis()
    if not redis:
        return False
    ttl = get_settings().tenant_cache_ttl_seconds
    try:
        await redis.setex(
            tenant_cache_key(tenant.subdomain), ttl, json.dumps(tenant.model_dump(mode="json"))
        )
    except Exception as e:
        logger.warning("Tenant cache write failed", subdomain=tenant.subdomain, error=str(e))
        return False
    return True


async def invalidate_tenant(subdomain: str) -> bool:
    """Drop a cached church.

    Returns:
        True if Redis acknowledged the delete, False if Redis unavailable
    """
    redis = await get_redis()
    if not redis:
        return False
    try:
        await redis.delete(tenant_cache_key(subdomain))
    except Exception as e:
        logger.warning("Tenant cache invalidation failed", subdomain=subdomain, error=str(e))
        return False
    return True
