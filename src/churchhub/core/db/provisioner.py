"""Schema provisioning - the only component that issues DDL.

All operations are idempotent and transactional: PostgreSQL DDL is
transactional, so a failure half-way leaves nothing behind. A
transaction-scoped advisory lock serializes concurrent provisioning of
the same namespace across processes.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Connection, Table, text
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlmodel import SQLModel

from src.churchhub.core.db.executor import TRANSIENT_ERRORS
from src.churchhub.core.db.pools import ConnectionPoolRegistry
from src.churchhub.core.exceptions import TransientStoreError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.security.validators import TENANT_SCHEMA_PREFIX, tenant_schema_name
from src.churchhub.models.public import SHARED_TABLES
from src.churchhub.models.tenant import TENANT_TABLES

logger = get_logger(__name__)

SHARED_SCHEMA_LOCK_KEY = "churchhub:shared_schema"

_ADVISORY_LOCK = text("SELECT pg_advisory_xact_lock(hashtext(:key))")


def _create_tables(
    connection: Connection,
    tables: Sequence[Table],
    schema: str | None = None,
) -> None:
    """Create missing tables and indexes (sync, run via run_sync).

    Tenant tables carry no schema; schema_translate_map points them at the
    church namespace, including FK targets and the existence checks.
    """
    if schema is not None:
        connection = connection.execution_options(schema_translate_map={None: schema})
    SQLModel.metadata.create_all(connection, tables=list(tables), checkfirst=True)


async def _quote_schema(connection: AsyncConnection, schema: str) -> str:
    quoted = await connection.scalar(text("SELECT quote_ident(:schema)"), {"schema": schema})
    return str(quoted)


class SchemaProvisioner:
    def __init__(self, pools: ConnectionPoolRegistry):
        self.pools = pools

    async def initialize_shared_schema(self) -> None:
        """Create the control-plane tables if they do not exist."""
        try:
            async with self.pools.get_shared_pool().begin() as connection:
                await connection.execute(_ADVISORY_LOCK, {"key": SHARED_SCHEMA_LOCK_KEY})
                await connection.run_sync(_create_tables, SHARED_TABLES)
        except TRANSIENT_ERRORS as e:
            raise TransientStoreError() from e
        logger.info("Shared schema initialized", tables=len(SHARED_TABLES))

    async def create_tenant_namespace(self, tenant_id: UUID) -> str:
        """Create a church namespace with all its tables and indexes.

        Re-running against an existing namespace is a no-op.

        Returns:
            The namespace (schema) name
        """
        schema = tenant_schema_name(tenant_id)
        try:
            async with self.pools.get_shared_pool().begin() as connection:
                await connection.execute(_ADVISORY_LOCK, {"key": schema})
                quoted = await _quote_schema(connection, schema)
                await connection.execute(text(f"CREATE SCHEMA IF NOT EXISTS {quoted}"))
                await connection.run_sync(_create_tables, TENANT_TABLES, schema)
        except TRANSIENT_ERRORS as e:
            raise TransientStoreError() from e

        logger.info(
            "Tenant namespace provisioned",
            tenant_id=str(tenant_id),
            schema=schema,
            tables=len(TENANT_TABLES),
        )
        return schema

    async def drop_tenant_namespace(self, tenant_id: UUID) -> None:
        """Drop a church namespace and everything in it, then evict its pool.

        Callers must have checked super-admin permission.
        """
        schema = tenant_schema_name(tenant_id)
        try:
            async with self.pools.get_shared_pool().begin() as connection:
                await connection.execute(_ADVISORY_LOCK, {"key": schema})
                quoted = await _quote_schema(connection, schema)
                await connection.execute(text(f"DROP SCHEMA IF EXISTS {quoted} CASCADE"))
        except TRANSIENT_ERRORS as e:
            raise TransientStoreError() from e

        await self.pools.evict_tenant_pool(tenant_id)
        logger.info("Tenant namespace dropped", tenant_id=str(tenant_id), schema=schema)

    async def namespace_exists(self, tenant_id: UUID) -> bool:
        schema = tenant_schema_name(tenant_id)
        try:
            async with self.pools.get_shared_pool().connect() as connection:
                present = await connection.scalar(
                    text("SELECT to_regnamespace(:schema) IS NOT NULL"), {"schema": schema}
                )
        except TRANSIENT_ERRORS as e:
            raise TransientStoreError() from e
        return bool(present)

    async def list_namespaces(self) -> set[str]:
        """Names of every church namespace present in the database."""
        try:
            async with self.pools.get_shared_pool().connect() as connection:
                result = await connection.execute(
                    text("SELECT nspname FROM pg_namespace WHERE starts_with(nspname, :prefix)"),
                    {"prefix": TENANT_SCHEMA_PREFIX},
                )
                names = {row[0] for row in result}
        except TRANSIENT_ERRORS as e:
            raise TransientStoreError() from e
        return names
