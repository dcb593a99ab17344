"""Church (tenant) resolution from the request."""

import ipaddress
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, Request, status

from src.churchhub.api.dependencies.repositories import TenantRepo
from src.churchhub.core.logging import bind_tenant_context
from src.churchhub.models.public import Tenant
from src.churchhub.services.tenant_resolver import TenantResolver


def get_tenant_resolver(tenant_repo: TenantRepo) -> TenantResolver:
    return TenantResolver(tenant_repo)


Resolver = Annotated[TenantResolver, Depends(get_tenant_resolver)]


def subdomain_from_host(host: str | None) -> str | None:
    """First DNS label of a host with at least three labels.

    'graca.churchhub.com.br:443' -> 'graca'; localhost and bare IPs -> None.
    """
    if not host:
        return None
    hostname = host.rsplit(":", 1)[0] if host.count(":") == 1 else host
    if hostname == "localhost":
        return None
    try:
        ipaddress.ip_address(hostname.strip("[]"))
        return None
    except ValueError:
        pass
    labels = hostname.split(".")
    if len(labels) < 3:
        return None
    return labels[0]


def get_routing_key(
    request: Request,
    x_church_subdomain: Annotated[str | None, Header()] = None,
    tenant: Annotated[str | None, Query(description="Routing key for local development")] = None,
) -> str | None:
    """Routing key: X-Church-Subdomain header, then ?tenant=, then Host."""
    return x_church_subdomain or tenant or subdomain_from_host(request.headers.get("host"))


RoutingKey = Annotated[str | None, Depends(get_routing_key)]


async def get_current_tenant(routing_key: RoutingKey, resolver: Resolver) -> Tenant:
    """Resolve the church for a tenant-scoped endpoint.

    Reserved keys (www, admin) carry no church, so they are rejected here.
    """
    if not routing_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Church context required (X-Church-Subdomain header)",
        )
    tenant = await resolver.resolve_tenant(routing_key)
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Church context required (X-Church-Subdomain header)",
        )
    bind_tenant_context(tenant.id, tenant.subdomain)
    return tenant


CurrentTenant = Annotated[Tenant, Depends(get_current_tenant)]
