"""Database dependencies - pool registry, executor and shared sessions.

The registry lives on app.state (created by the lifespan); nothing here
holds module-level database state.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.db import ConnectionPoolRegistry, SchemaProvisioner, TenantQueryExecutor


def get_pool_registry(request: Request) -> ConnectionPoolRegistry:
    return request.app.state.pools  # type: ignore[no-any-return]


PoolRegistry = Annotated[ConnectionPoolRegistry, Depends(get_pool_registry)]


def get_executor(pools: PoolRegistry) -> TenantQueryExecutor:
    return TenantQueryExecutor(pools)


Executor = Annotated[TenantQueryExecutor, Depends(get_executor)]


def get_provisioner(pools: PoolRegistry) -> SchemaProvisioner:
    return SchemaProvisioner(pools)


Provisioner = Annotated[SchemaProvisioner, Depends(get_provisioner)]


async def get_db_session(executor: Executor) -> AsyncGenerator[AsyncSession]:
    """Get a control-plane session for the request."""
    async with executor.shared_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
