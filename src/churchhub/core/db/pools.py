"""Connection pool registry - one shared pool plus one pool per church.

The registry is constructed by the application lifespan and stored on
``app.state``; request handlers reach it through the ``PoolRegistry``
dependency. Tests build their own instance.
"""

import ssl
import threading
from collections.abc import Callable
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.churchhub.core.config import Settings, get_settings
from src.churchhub.core.exceptions import TransientStoreError
from src.churchhub.core.logging import get_logger

logger = get_logger(__name__)

EngineFactory = Callable[..., AsyncEngine]


def build_connect_args(settings: Settings) -> dict[str, Any]:
    """Get asyncpg connection arguments including SSL configuration."""
    connect_args: dict[str, Any] = {
        "statement_cache_size": settings.database_statement_cache_size,
        "timeout": settings.database_connect_timeout,
    }

    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


class ConnectionPoolRegistry:
    """Lazily creates and caches bounded connection pools.

    Pool lookups are synchronous and guarded by a lock, so concurrent first
    access for the same church always converges on a single engine.
    Disposal is async and happens outside the lock.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine_factory: EngineFactory = create_async_engine,
    ):
        self._settings = settings or get_settings()
        self._engine_factory = engine_factory
        self._lock = threading.Lock()
        self._shared_pool: AsyncEngine | None = None
        self._tenant_pools: dict[UUID, AsyncEngine] = {}
        self._closed = False

    def _create_engine(self, pool_size: int, max_overflow: int) -> AsyncEngine:
        settings = self._settings
        return self._engine_factory(
            settings.database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,
            connect_args=build_connect_args(settings),
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise TransientStoreError("Connection pools are shutting down")

    def get_shared_pool(self) -> AsyncEngine:
        """Get or create the control-plane pool."""
        with self._lock:
            self._ensure_open()
            if self._shared_pool is None:
                self._shared_pool = self._create_engine(
                    self._settings.database_pool_size,
                    self._settings.database_max_overflow,
                )
                logger.info(
                    "Shared pool created",
                    pool_size=self._settings.database_pool_size,
                )
            return self._shared_pool

    def get_tenant_pool(self, tenant_id: UUID) -> AsyncEngine:
        """Get or create the pool for one church."""
        with self._lock:
            self._ensure_open()
            engine = self._tenant_pools.get(tenant_id)
            if engine is None:
                engine = self._create_engine(
                    self._settings.tenant_pool_size,
                    self._settings.tenant_max_overflow,
                )
                self._tenant_pools[tenant_id] = engine
                logger.info(
                    "Tenant pool created",
                    tenant_id=str(tenant_id),
                    pool_size=self._settings.tenant_pool_size,
                )
            return engine

    def has_tenant_pool(self, tenant_id: UUID) -> bool:
        with self._lock:
            return tenant_id in self._tenant_pools

    @property
    def tenant_pool_count(self) -> int:
        with self._lock:
            return len(self._tenant_pools)

    async def evict_tenant_pool(self, tenant_id: UUID) -> bool:
        """Remove and dispose a church's pool.

        Returns:
            True if a pool was cached and disposed, False otherwise
        """
        with self._lock:
            engine = self._tenant_pools.pop(tenant_id, None)
        if engine is None:
            return False
        await engine.dispose()
        logger.info("Tenant pool evicted", tenant_id=str(tenant_id))
        return True

    async def close_all(self) -> None:
        """Dispose every pool. Call during shutdown."""
        with self._lock:
            self._closed = True
            engines = list(self._tenant_pools.values())
            self._tenant_pools.clear()
            shared, self._shared_pool = self._shared_pool, None

        for engine in engines:
            await engine.dispose()
        if shared is not None:
            await shared.dispose()
        logger.info("Connection pools closed", tenant_pools=len(engines))
