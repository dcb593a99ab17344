import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.churchhub.api.middlewares import setup_middlewares
from src.churchhub.api.v1.router import api_router
from src.churchhub.core.config import get_settings
from src.churchhub.core.db import ConnectionPoolRegistry, SchemaProvisioner, TenantQueryExecutor
from src.churchhub.core.exceptions import setup_exception_handlers
from src.churchhub.core.logging import get_logger, setup_logging
from src.churchhub.core.rate_limit import limiter
from src.churchhub.core.redis import close_redis, ping_redis

logger = get_logger(__name__)

# Health check caching
_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0
HEALTH_CACHE_TTL = 10  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    pools = ConnectionPoolRegistry(settings)
    app.state.pools = pools

    if settings.auto_initialize_schema:
        await SchemaProvisioner(pools).initialize_shared_schema()

    yield

    logger.info("Closing connections...")
    await close_redis()
    await pools.close_all()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login and current user"},
    {"name": "churches", "description": "Church registration, provisioning and administration"},
    {"name": "members", "description": "Church members (routed by subdomain)"},
    {"name": "privacy", "description": "LGPD consents and data-subject requests"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant church management API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check with dependency validation and caching."""
        global _health_cache, _health_cache_time

        now = time.time()

        # Return cached result if still valid
        if _health_cache and (now - _health_cache_time) < HEALTH_CACHE_TTL:
            cached_response = _health_cache.copy()
            cached_response["cached"] = True
            cached_response["cache_age_seconds"] = round(now - _health_cache_time, 1)
            status_code = 200 if cached_response["status"] != "unhealthy" else 503
            return JSONResponse(content=cached_response, status_code=status_code)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "tenant_pools": 0,
            "cached": False,
            "timestamp": now,
        }

        try:
            pools: ConnectionPoolRegistry = app.state.pools
            await TenantQueryExecutor(pools).execute_shared("SELECT 1")
            health_status["database"] = "healthy"
            health_status["tenant_pools"] = pools.tenant_pool_count
        except Exception as e:
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        # Redis only backs the tenant cache; its loss is "degraded"
        health_status["redis"] = await ping_redis()
        if health_status["redis"].startswith("unhealthy") and health_status["status"] == "healthy":
            health_status["status"] = "degraded"

        _health_cache = health_status
        _health_cache_time = now

        status_code = 200 if health_status["status"] != "unhealthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
