"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

from src.churchhub.api.dependencies.auth import (
    CurrentUser,
    TenantUser,
    get_current_user,
    get_tenant_user,
)
from src.churchhub.api.dependencies.db import (
    DBSession,
    Executor,
    PoolRegistry,
    Provisioner,
    get_db_session,
    get_executor,
    get_pool_registry,
    get_provisioner,
)
from src.churchhub.api.dependencies.repositories import (
    AuditRepo,
    ConsentRepo,
    DataRequestRepo,
    TenantRepo,
    UserRepo,
)
from src.churchhub.api.dependencies.services import (
    AuditServiceDep,
    AuthServiceDep,
    ChurchServiceDep,
    MemberServiceDep,
    PrivacyServiceDep,
    RegistrationServiceDep,
)
from src.churchhub.api.dependencies.tenant import (
    CurrentTenant,
    Resolver,
    RoutingKey,
    get_current_tenant,
    get_routing_key,
    subdomain_from_host,
)

__all__ = [
    # Auth
    "CurrentUser",
    "TenantUser",
    "get_current_user",
    "get_tenant_user",
    # Database
    "DBSession",
    "Executor",
    "PoolRegistry",
    "Provisioner",
    "get_db_session",
    "get_executor",
    "get_pool_registry",
    "get_provisioner",
    # Repositories
    "AuditRepo",
    "ConsentRepo",
    "DataRequestRepo",
    "TenantRepo",
    "UserRepo",
    # Services
    "AuditServiceDep",
    "AuthServiceDep",
    "ChurchServiceDep",
    "MemberServiceDep",
    "PrivacyServiceDep",
    "RegistrationServiceDep",
    # Tenant
    "CurrentTenant",
    "Resolver",
    "RoutingKey",
    "get_current_tenant",
    "get_routing_key",
    "subdomain_from_host",
]
