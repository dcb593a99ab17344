"""Database utilities - pool registry, tenant-scoped execution, provisioning."""

from src.churchhub.core.db.executor import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    QueryResult,
    TenantQueryExecutor,
    sqlstate_of,
)
from src.churchhub.core.db.pools import ConnectionPoolRegistry
from src.churchhub.core.db.provisioner import SchemaProvisioner

__all__ = [
    "FOREIGN_KEY_VIOLATION",
    "UNIQUE_VIOLATION",
    "ConnectionPoolRegistry",
    "QueryResult",
    "SchemaProvisioner",
    "TenantQueryExecutor",
    "sqlstate_of",
]
