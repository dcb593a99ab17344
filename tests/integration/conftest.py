"""Integration test fixtures for database and HTTP client operations.

These fixtures require a running PostgreSQL at DATABASE_URL. When it is
unreachable every integration test is skipped.
"""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

from src.churchhub.core import redis as redis_core
from src.churchhub.core.config import get_settings
from src.churchhub.core.db import ConnectionPoolRegistry, SchemaProvisioner, TenantQueryExecutor
from src.churchhub.main import create_app
from tests.utils.cleanup import cleanup_church_cascade


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients hold a reference to their event loop; drop them per test."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture
async def pools() -> AsyncGenerator[ConnectionPoolRegistry]:
    """Pool registry against the test database, with the shared schema in place."""
    registry = ConnectionPoolRegistry(get_settings())
    try:
        await TenantQueryExecutor(registry).execute_shared("SELECT 1")
    except Exception as e:
        await registry.close_all()
        pytest.skip(f"PostgreSQL not available: {e}")

    await SchemaProvisioner(registry).initialize_shared_schema()
    yield registry
    await registry.close_all()


@pytest.fixture
def executor(pools: ConnectionPoolRegistry) -> TenantQueryExecutor:
    return TenantQueryExecutor(pools)


@pytest.fixture
def provisioner(pools: ConnectionPoolRegistry) -> SchemaProvisioner:
    return SchemaProvisioner(pools)


@pytest.fixture
async def churches(pools: ConnectionPoolRegistry) -> AsyncGenerator[list[UUID]]:
    """Collects church ids created by a test and removes them afterwards."""
    created: list[UUID] = []
    yield created
    for tenant_id in created:
        await cleanup_church_cascade(pools, tenant_id)


@pytest.fixture
async def client(pools: ConnectionPoolRegistry) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to an app that shares the test pool registry."""
    app = create_app()
    app.state.pools = pools
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
