"""Tenant-scoped query execution.

Every tenant query runs on a connection whose search_path is set to
ONLY the church namespace for the duration of the call and reset to
public before the connection returns to the pool.
"""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from asyncpg.exceptions import ForeignKeyViolationError, UniqueViolationError
from sqlalchemy import exc as sa_exc
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession, async_sessionmaker
from sqlalchemy.sql import Executable

from src.churchhub.core.db.pools import ConnectionPoolRegistry
from src.churchhub.core.exceptions import (
    NamespaceNotFoundError,
    TransientStoreError,
    UnauthorizedError,
)
from src.churchhub.core.logging import get_logger
from src.churchhub.core.security.validators import tenant_schema_name
from src.churchhub.models.base import SHARED_SCHEMA

logger = get_logger(__name__)

TENANT_ID_PARAM = "tenant_id"

_RESET_SEARCH_PATH = text(f"SET search_path TO {SHARED_SCHEMA}")

# Pool exhaustion (sqlalchemy TimeoutError), refused or dropped connections
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    sa_exc.TimeoutError,
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    OSError,
)

UNIQUE_VIOLATION: str = UniqueViolationError.sqlstate
FOREIGN_KEY_VIOLATION: str = ForeignKeyViolationError.sqlstate


def sqlstate_of(error: sa_exc.DBAPIError) -> str | None:
    """SQLSTATE of the driver error behind a SQLAlchemy DBAPIError, if known."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


_NAMESPACE_LOOKUP = text(
    "SELECT quote_ident(:schema) AS quoted, to_regnamespace(:schema) IS NOT NULL AS present"
)


@dataclass
class QueryResult:
    """Materialized result of one statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None

    def scalar(self) -> Any:
        row = self.first()
        if row is None:
            return None
        return next(iter(row.values()), None)


def _as_statement(query: str | Executable) -> Executable:
    if isinstance(query, str):
        return text(query)
    return query


def _bind_names(statement: Executable) -> set[str]:
    """Names of the bind parameters a statement declares."""
    return set(statement.compile().params)  # type: ignore[attr-defined]


def _same_tenant(value: Any, tenant_id: UUID) -> bool:
    try:
        return UUID(str(value)) == tenant_id
    except ValueError:
        return False


def bind_tenant_params(
    tenant_id: UUID,
    statement: Executable,
    params: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Fill the tenant_id bind parameter with the target church.

    Raises:
        UnauthorizedError: If the caller supplied a different tenant_id
    """
    bound = dict(params or {})
    if TENANT_ID_PARAM in bound and not _same_tenant(bound[TENANT_ID_PARAM], tenant_id):
        logger.warning("Cross-tenant parameter rejected", tenant_id=str(tenant_id))
        raise UnauthorizedError()
    if TENANT_ID_PARAM in bound or TENANT_ID_PARAM in _bind_names(statement):
        bound[TENANT_ID_PARAM] = tenant_id
    return bound


async def _run(
    connection: AsyncConnection,
    statement: Executable,
    params: dict[str, Any],
) -> QueryResult:
    result = await connection.execute(statement, params)
    rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
    return QueryResult(rows=rows, rowcount=result.rowcount)


class TenantQueryExecutor:
    """Runs parameterized statements against the shared or a church pool."""

    def __init__(self, pools: ConnectionPoolRegistry):
        self.pools = pools

    async def execute(
        self,
        tenant_id: UUID,
        query: str | Executable,
        params: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Execute one statement inside a church namespace.

        Args:
            tenant_id: Target church
            query: SQL text with :named parameters, or a SQLAlchemy statement
            params: Bind values. A :tenant_id parameter is filled automatically.

        Returns:
            QueryResult with materialized rows and the affected row count

        Raises:
            NamespaceNotFoundError: The namespace does not exist (pool is evicted)
            UnauthorizedError: params carry a different church's tenant_id
            TransientStoreError: Pool exhausted or database unreachable
        """
        schema = tenant_schema_name(tenant_id)
        statement = _as_statement(query)
        bound = bind_tenant_params(tenant_id, statement, params)

        try:
            engine = self.pools.get_tenant_pool(tenant_id)
            async with engine.connect() as connection:
                try:
                    lookup = (await connection.execute(_NAMESPACE_LOOKUP, {"schema": schema})).one()
                    if not lookup.present:
                        raise NamespaceNotFoundError(tenant_id)
                    await connection.execute(text(f"SET search_path TO {lookup.quoted}"))
                    await connection.commit()

                    result = await _run(connection, statement, bound)
                    await connection.commit()
                    return result
                except BaseException:
                    await connection.rollback()
                    raise
                finally:
                    if not connection.closed and not connection.invalidated:
                        await connection.execute(_RESET_SEARCH_PATH)
                        await connection.commit()
        except NamespaceNotFoundError:
            logger.warning("Tenant namespace missing", tenant_id=str(tenant_id), schema=schema)
            await self.pools.evict_tenant_pool(tenant_id)
            raise
        except TRANSIENT_ERRORS as e:
            logger.warning("Tenant query failed transiently", tenant_id=str(tenant_id), error=str(e))
            raise TransientStoreError() from e

    async def execute_shared(
        self,
        query: str | Executable,
        params: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Execute one statement against the control plane."""
        statement = _as_statement(query)
        try:
            engine = self.pools.get_shared_pool()
            async with engine.connect() as connection:
                try:
                    result = await _run(connection, statement, dict(params or {}))
                    await connection.commit()
                    return result
                except BaseException:
                    await connection.rollback()
                    raise
        except TRANSIENT_ERRORS as e:
            logger.warning("Shared query failed transiently", error=str(e))
            raise TransientStoreError() from e

    @asynccontextmanager
    async def shared_session(self) -> AsyncGenerator[AsyncSession]:
        """Yield an AsyncSession on the shared pool.

        Transaction control (commit) stays with the caller.
        """
        session_factory = async_sessionmaker(
            bind=self.pools.get_shared_pool(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        try:
            async with session_factory() as session:
                yield session
        except TRANSIENT_ERRORS as e:
            logger.warning("Shared session failed transiently", error=str(e))
            raise TransientStoreError() from e
